"""Demonstration dataset shown until real sheet data is available.

Clearly marked as demo content so nobody mistakes it for a briefing.
"""

from __future__ import annotations

from typing import List

from .models import (
    EVERYONE,
    DocumentKind,
    DocumentRow,
    EntitySnapshot,
    OrganizationKind,
    OrganizationRow,
    Priority,
)

DEMO_GROUPS = ("DEMO GROUP A", "DEMO GROUP B", "DEMO GROUP C")
DEMO_CHARACTER_COUNT = 12


def _config_rows() -> List[OrganizationRow]:
    entries = [
        ("title", "DEMO EVENT - TEST DATA"),
        ("organizer", "DEMO ORGANIZER"),
        ("contact", "demo@example.com"),
        ("footer", "DEMO - FOR TESTING ONLY"),
        ("run-number", "999"),
        ("run-date", "1. 1. 2000"),
        ("run-venue", "DEMO VENUE"),
        ("run-address", "DEMO ADDRESS 999"),
    ]
    return [
        OrganizationRow(kind=OrganizationKind.CONFIG_ENTRY, name=key, group=value)
        for key, value in entries
    ]


def demo_organization() -> List[OrganizationRow]:
    rows = _config_rows()
    rows.extend(OrganizationRow(kind=OrganizationKind.GROUP, name=name) for name in DEMO_GROUPS)
    for index in range(1, DEMO_CHARACTER_COUNT + 1):
        rows.append(
            OrganizationRow(
                kind=OrganizationKind.CHARACTER,
                name=f"DEMO CHARACTER {index}",
                slug=f"demo-{index}",
                group=DEMO_GROUPS[(index - 1) % len(DEMO_GROUPS)],
                description=f"Demo character number {index}, used only for testing.",
            )
        )
    return rows


def demo_documents() -> List[DocumentRow]:
    return [
        DocumentRow(
            kind=DocumentKind.PROFILE_BLURB,
            recipient="demo-1",
            title="DEMO PROFILE",
            body="<p>Demo profile blurb, used only while developing.</p>",
            published_at="2000-01-01 18:00:00",
            priority=Priority.PRIMARY,
        ),
        DocumentRow(
            kind=DocumentKind.ORGANIZATIONAL,
            recipient=EVERYONE,
            title="Event rules",
            body="<p>Basic rules every participant follows.</p>",
            published_at="2000-01-01 18:00:02",
            priority=Priority.PRIMARY,
        ),
        DocumentRow(
            kind=DocumentKind.ORGANIZATIONAL,
            recipient=EVERYONE,
            title="Safety measures",
            body="<p>Safety procedures and the off-game signal.</p>",
            published_at="2000-01-01 18:00:05",
            priority=Priority.PRIMARY,
        ),
        DocumentRow(
            kind=DocumentKind.IN_GAME,
            recipient=EVERYONE,
            title="Area map",
            body="<p>The play area and its landmarks.</p>",
            published_at="2000-01-01 18:00:03",
            priority=Priority.NORMAL,
        ),
        DocumentRow(
            kind=DocumentKind.IN_GAME,
            recipient=EVERYONE,
            title="Timeline",
            body="<p>Play starts at 09:00 and ends at 18:00.</p>",
            published_at="2000-01-01 18:00:06",
            priority=Priority.NORMAL,
        ),
        DocumentRow(
            kind=DocumentKind.IN_GAME,
            recipient=DEMO_GROUPS[0],
            title="Group A orders",
            body="<p>Orders for every member of group A.</p>",
            published_at="2000-01-01 18:00:07",
            priority=Priority.NORMAL,
        ),
        DocumentRow(
            kind=DocumentKind.CHARACTER_PRIVATE,
            recipient="demo-1",
            title="Secret instructions",
            body="<p>Private instructions for demo character 1.</p>",
            published_at="2000-01-01 18:00:04",
            priority=Priority.PRIMARY,
        ),
        DocumentRow(
            kind=DocumentKind.CHARACTER_PRIVATE,
            recipient="demo-2",
            title="Patrol duty",
            body="<p>Private instructions for demo character 2.</p>",
            published_at="2000-01-01 18:00:08",
            priority=Priority.NORMAL,
        ),
    ]


def demo_snapshot() -> EntitySnapshot:
    return EntitySnapshot(
        organization=tuple(demo_organization()),
        documents=tuple(demo_documents()),
        advisory=None,
        source="demo",
    )
