"""Figures shown on the organizers' overview."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .dates import format_timestamp, published_sort_key
from .models import EVERYONE, DocumentKind, EntitySnapshot, EventConfig
from .visibility import list_characters


@dataclass(slots=True)
class AdminStats:
    total_characters: int
    total_documents: int
    last_update: str
    run_info: str


@dataclass(slots=True)
class CharacterSummary:
    name: str
    slug: str
    group: str
    document_count: int
    has_profile_blurb: bool


def compute_stats(snapshot: EntitySnapshot, config: EventConfig, now: Optional[datetime] = None) -> AdminStats:
    now = now or datetime.now()
    dates = [published_sort_key(doc.published_at, now) for doc in snapshot.documents]
    last_update = max(dates) if dates else now
    return AdminStats(
        total_characters=len(list_characters(snapshot.organization)),
        total_documents=len(snapshot.documents),
        last_update=format_timestamp(last_update),
        run_info=f"{config.run.number} | {config.run.date}",
    )


def character_summaries(snapshot: EntitySnapshot) -> List[CharacterSummary]:
    summaries = []
    for character in list_characters(snapshot.organization):
        own = [doc for doc in snapshot.documents if doc.recipient == character.slug]
        summaries.append(
            CharacterSummary(
                name=character.name,
                slug=character.slug,
                group=character.group,
                document_count=sum(
                    1 for doc in snapshot.documents if doc.recipient in (character.slug, EVERYONE)
                ),
                has_profile_blurb=any(doc.kind == DocumentKind.PROFILE_BLURB for doc in own),
            )
        )
    return summaries
