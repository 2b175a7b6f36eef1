"""Selection, ordering and grouping of documents for one viewer."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .dates import published_sort_key
from .logging import get_logger
from .models import (
    EVERYONE,
    DocKindValue,
    DocumentKind,
    DocumentRow,
    OrganizationKind,
    OrganizationRow,
)

logger = get_logger(__name__)

GroupedDocuments = Dict[DocKindValue, List[DocumentRow]]


def list_characters(organization: Iterable[OrganizationRow]) -> List[OrganizationRow]:
    return [row for row in organization if row.kind == OrganizationKind.CHARACTER]


def find_character(organization: Iterable[OrganizationRow], slug: str) -> Optional[OrganizationRow]:
    for row in organization:
        if row.kind == OrganizationKind.CHARACTER and row.slug == slug:
            return row
    return None


def resolve_group(organization: Iterable[OrganizationRow], slug: str) -> str:
    character = find_character(organization, slug)
    return character.group if character else ""


def visible_documents(
    documents: Iterable[DocumentRow],
    viewer: str,
    organization: Iterable[OrganizationRow],
) -> List[DocumentRow]:
    """Return the documents ``viewer`` may read, in source order.

    ``viewer`` is a character slug or ``EVERYONE``; the latter is the
    administrative broadcast view and sees only documents for everyone.
    A viewer without a group, or unknown to the sheet, has the group ``""``
    and so also reads documents with a blank recipient.
    """
    if viewer == EVERYONE:
        return [doc for doc in documents if doc.recipient == EVERYONE]

    recipients = {viewer, EVERYONE, resolve_group(organization, viewer)}
    return [doc for doc in documents if doc.recipient in recipients]


def order_documents(documents: Iterable[DocumentRow], now: Optional[datetime] = None) -> List[DocumentRow]:
    """Primary documents first, then newest first. Unreadable dates count as ``now``."""
    now = now or datetime.now()
    by_date = sorted(documents, key=lambda doc: published_sort_key(doc.published_at, now), reverse=True)
    return sorted(by_date, key=lambda doc: 0 if doc.is_primary else 1)


def group_by_kind(documents: Iterable[DocumentRow]) -> GroupedDocuments:
    grouped: GroupedDocuments = {}
    for doc in documents:
        grouped.setdefault(doc.kind, []).append(doc)
    return grouped


def documents_for(
    documents: Iterable[DocumentRow],
    viewer: str,
    organization: Sequence[OrganizationRow],
    now: Optional[datetime] = None,
) -> GroupedDocuments:
    visible = visible_documents(documents, viewer, organization)
    grouped = group_by_kind(order_documents(visible, now=now))
    logger.debug(
        "documents_for",
        viewer=viewer,
        visible=len(visible),
        kinds=[getattr(kind, "value", kind) for kind in grouped],
    )
    return grouped


def split_profile_blurb(
    documents: Iterable[DocumentRow],
) -> Tuple[Optional[DocumentRow], List[DocumentRow]]:
    """Separate the first profile blurb from the rest of ``documents``."""
    blurb: Optional[DocumentRow] = None
    rest: List[DocumentRow] = []
    for doc in documents:
        if blurb is None and doc.kind == DocumentKind.PROFILE_BLURB:
            blurb = doc
            continue
        rest.append(doc)
    return blurb, rest
