"""Google Sheets CSV fetcher.

Reads a sheet tab through the public gviz CSV endpoint:
  https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&sheet={table}

Notes:
- Not authenticated; the spreadsheet must be shared for viewing.
- Every failure is turned into an empty string and logged with a
  ``category``. Nothing raised by httpx leaves this module.
"""

from __future__ import annotations

import re
from typing import Optional

import httpx

from .logging import get_logger

logger = get_logger(__name__)

ORGANIZATION_TABLE = "organizace"
DOCUMENTS_TABLE = "dokumenty"

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&sheet="
PLACEHOLDER_MARKER = "EXAMPLE"

SHEET_ID_RE = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")
EDIT_FRAGMENTS = ("/edit", "#gid=")


def is_configured(url: Optional[str]) -> bool:
    return bool(url and url.strip() and PLACEHOLDER_MARKER not in url)


def needs_export_rewrite(url: str) -> bool:
    return any(fragment in url for fragment in EDIT_FRAGMENTS)


def sheet_id_from_url(url: str) -> Optional[str]:
    m = SHEET_ID_RE.search(url or "")
    return m.group(1) if m else None


def export_base_url(url: Optional[str]) -> Optional[str]:
    """Return the CSV export prefix for ``url``, or ``None`` if there is none.

    A shared "edit" link is rebuilt into the export form from its
    spreadsheet id; a link without an id cannot be used.
    """
    if not is_configured(url):
        return None
    url = url.strip()
    if not needs_export_rewrite(url):
        return url
    sheet_id = sheet_id_from_url(url)
    if not sheet_id:
        return None
    return EXPORT_URL.format(sheet_id=sheet_id)


def normalize_sheets_url(url: str) -> str:
    """Rewrite an edit link into the export form, leaving other input as is."""
    if not is_configured(url) or not needs_export_rewrite(url):
        return url.strip()
    return export_base_url(url) or url.strip()


def _looks_like_html(body: str) -> bool:
    head = body.lstrip()[:512].lower()
    return head.startswith("<!doctype html") or head.startswith("<html")


class SheetsFetcher:
    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "larp-briefing/1.0",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.1",
                "Cache-Control": "no-cache",
            },
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_table(self, sheets_url: Optional[str], table: str) -> str:
        """Return the CSV text of ``table``, or ``""`` when it cannot be had."""
        base_url = export_base_url(sheets_url)
        if base_url is None:
            if is_configured(sheets_url):
                logger.warning("sheets_url_unusable", table=table, url=sheets_url)
            else:
                logger.info("sheets_not_configured", table=table)
            return ""

        url = f"{base_url}{table}"
        logger.info("fetch_table", table=table, url=url)
        try:
            response = await self._client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("fetch_table_failed", table=table, category="timeout", error=str(exc))
            return ""
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "fetch_table_failed",
                table=table,
                category="http_status",
                status=exc.response.status_code,
            )
            return ""
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("fetch_table_failed", table=table, category="network", error=str(exc))
            return ""

        body = response.text
        if not body or not body.strip():
            logger.warning("fetch_table_failed", table=table, category="empty_body")
            return ""
        if _looks_like_html(body):
            # private sheets answer with a sign-in page instead of CSV
            logger.warning("fetch_table_failed", table=table, category="html_page")
            return ""

        logger.info("fetch_table_done", table=table, chars=len(body))
        return body
