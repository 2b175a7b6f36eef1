"""Mapping of parsed sheet rows into typed entities.

The sheets are edited by hand, so headers and enum values are matched
case-insensitively and in both the English and the Czech sheet
vocabulary. Nothing is rejected: missing fields become empty strings and
values outside the known enumerations are kept as raw text.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping, Type, TypeVar, Union

from .logging import get_logger
from .models import (
    EVERYONE,
    DocumentKind,
    DocumentRow,
    OrganizationKind,
    OrganizationRow,
    Priority,
)

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

ORGANIZATION_FIELDS: Dict[str, List[str]] = {
    "kind": ["kind", "typ"],
    "name": ["name", "jmeno"],
    "slug": ["slug"],
    "group": ["group", "skupina"],
    "description": ["description", "popis"],
}

DOCUMENT_FIELDS: Dict[str, List[str]] = {
    "kind": ["kind", "typ"],
    "recipient": ["recipient", "komu"],
    "title": ["title", "nadpis"],
    "body": ["body", "obsah"],
    "published_at": ["publishedat", "published_at", "published-at", "datum-zverejneni"],
    "priority": ["priority", "priorita"],
}

ORGANIZATION_KIND_ALIASES = {
    "skupina": OrganizationKind.GROUP,
    "postava": OrganizationKind.CHARACTER,
    "konfigurace": OrganizationKind.CONFIG_ENTRY,
}

DOCUMENT_KIND_ALIASES = {
    "organizacni": DocumentKind.ORGANIZATIONAL,
    "herni": DocumentKind.IN_GAME,
    "postava": DocumentKind.CHARACTER_PRIVATE,
    "medailonek": DocumentKind.PROFILE_BLURB,
}

PRIORITY_ALIASES = {
    "hlavni": Priority.PRIMARY,
    "normalni": Priority.NORMAL,
}

EVERYONE_ALIASES = {EVERYONE, "vsichni"}


def coerce_enum(enum_cls: Type[E], raw: str, aliases: Mapping[str, E]) -> Union[E, str]:
    """Return the matching enum member, or ``raw`` unchanged if there is none."""
    key = raw.strip().lower()
    if key in aliases:
        return aliases[key]
    try:
        return enum_cls(key)
    except ValueError:
        return raw


def _field_lookup(row: Mapping[str, str]) -> Dict[str, str]:
    return {str(key).strip().lower(): value for key, value in row.items()}


def _pick(lookup: Mapping[str, str], names: Iterable[str]) -> str:
    for name in names:
        value = lookup.get(name)
        if value is not None:
            return value
    return ""


def _schema_values(row: Mapping[str, str], schema: Mapping[str, List[str]]) -> Dict[str, str]:
    lookup = _field_lookup(row)
    return {field: _pick(lookup, names) for field, names in schema.items()}


def normalize_recipient(raw: str) -> str:
    if raw.strip().lower() in EVERYONE_ALIASES:
        return EVERYONE
    return raw


def normalize_organization(rows: Iterable[Mapping[str, str]]) -> List[OrganizationRow]:
    entities: List[OrganizationRow] = []
    for row in rows:
        values = _schema_values(row, ORGANIZATION_FIELDS)
        kind = coerce_enum(OrganizationKind, values["kind"], ORGANIZATION_KIND_ALIASES)
        if not isinstance(kind, OrganizationKind):
            logger.debug("unknown_organization_kind", kind=kind, name=values["name"])
        entities.append(
            OrganizationRow(
                kind=kind,
                name=values["name"],
                slug=values["slug"],
                group=values["group"],
                description=values["description"],
            )
        )
    return entities


def normalize_documents(rows: Iterable[Mapping[str, str]]) -> List[DocumentRow]:
    entities: List[DocumentRow] = []
    for row in rows:
        values = _schema_values(row, DOCUMENT_FIELDS)
        kind = coerce_enum(DocumentKind, values["kind"], DOCUMENT_KIND_ALIASES)
        if not isinstance(kind, DocumentKind):
            logger.debug("unknown_document_kind", kind=kind, title=values["title"])
        entities.append(
            DocumentRow(
                kind=kind,
                recipient=normalize_recipient(values["recipient"]),
                title=values["title"],
                body=values["body"],
                published_at=values["published_at"],
                priority=coerce_enum(Priority, values["priority"], PRIORITY_ALIASES),
            )
        )
    return entities
