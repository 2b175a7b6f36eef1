"""Parsing of exported spreadsheet CSV into ordered field maps."""

from __future__ import annotations

from typing import Dict, List, Optional

from .logging import get_logger

logger = get_logger(__name__)

QUOTE = '"'


def split_fields(line: str, delimiter: str = ",") -> List[str]:
    """Split one CSV line into fields.

    A quote toggles quoted mode, a doubled quote inside quotes is a literal
    quote and the delimiter only ends a field outside quotes. Whitespace
    around a field is trimmed, text inside quotes is kept as is.
    """
    fields: List[str] = []
    buf: List[str] = []
    in_quotes = False
    quoted_start: Optional[int] = None
    quoted_end: Optional[int] = None

    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                buf.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
            if in_quotes:
                if quoted_start is None:
                    quoted_start = len(buf)
            else:
                quoted_end = len(buf)
        elif char == delimiter and not in_quotes:
            fields.append(_finish_field(buf, quoted_start, quoted_end))
            buf = []
            quoted_start = quoted_end = None
        else:
            buf.append(char)
        i += 1

    if in_quotes:
        # unterminated quote: everything after it belongs to the last field
        quoted_end = len(buf)
    fields.append(_finish_field(buf, quoted_start, quoted_end))
    return fields


def _finish_field(buf: List[str], quoted_start: Optional[int], quoted_end: Optional[int]) -> str:
    text = "".join(buf)
    if quoted_start is None:
        return text.strip()
    end = len(text) if quoted_end is None else quoted_end
    return text[:quoted_start].lstrip() + text[quoted_start:end] + text[end:].rstrip()


def parse_header(line: str, delimiter: str = ",") -> List[str]:
    return [cell.strip().strip(QUOTE).strip() for cell in split_fields(line, delimiter)]


def parse_rows(text: str, delimiter: str = ",") -> List[Dict[str, str]]:
    """Parse CSV text into one dict per data row, keyed by header name.

    Missing trailing fields become empty strings and fields beyond the
    header are dropped. Empty or header-only input yields an empty list.
    """
    if not text:
        return []

    # only "\n" ends a row; other line separators belong to the field text
    lines = [line.rstrip("\r") for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        return []

    headers = parse_header(lines[0], delimiter)
    rows: List[Dict[str, str]] = []
    for line_no, line in enumerate(lines[1:], start=2):
        values = split_fields(line, delimiter)
        if len(values) != len(headers):
            logger.debug(
                "row_field_count_mismatch",
                line=line_no,
                expected=len(headers),
                found=len(values),
            )
        rows.append(
            {header: values[index] if index < len(values) else "" for index, header in enumerate(headers)}
        )

    logger.debug("parsed_rows", rows=len(rows), headers=headers)
    return rows
