"""JSON-ready dicts for entities, shared by the HTTP API and the CLI."""

from __future__ import annotations

from .models import DocumentRow, OrganizationRow, enum_label
from .visibility import GroupedDocuments


def document_payload(doc: DocumentRow) -> dict:
    return {
        "kind": enum_label(doc.kind),
        "recipient": doc.recipient,
        "title": doc.title,
        "body": doc.body,
        "published_at": doc.published_at,
        "priority": enum_label(doc.priority),
    }


def grouped_payload(grouped: GroupedDocuments) -> dict:
    return {enum_label(kind): [document_payload(doc) for doc in docs] for kind, docs in grouped.items()}


def character_payload(row: OrganizationRow) -> dict:
    return {
        "name": row.name,
        "slug": row.slug,
        "group": row.group,
        "description": row.description,
    }
