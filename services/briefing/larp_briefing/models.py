"""Domain models for organization rows, documents and event configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

EVERYONE = "everyone"


class OrganizationKind(str, Enum):
    GROUP = "group"
    CHARACTER = "character"
    CONFIG_ENTRY = "config-entry"


class DocumentKind(str, Enum):
    ORGANIZATIONAL = "organizational"
    IN_GAME = "in-game"
    CHARACTER_PRIVATE = "character-private"
    PROFILE_BLURB = "profile-blurb"


class Priority(str, Enum):
    PRIMARY = "primary"
    NORMAL = "normal"


class Advisory(str, Enum):
    """Degraded-state indicator shown over a page rendered from fallback data."""

    DEMO_DATA = "demo-data"
    PARTIAL_DATA = "partial-data"

    @property
    def message(self) -> str:
        if self is Advisory.PARTIAL_DATA:
            return "Partial data from the remote source, using demo data for consistency."
        return "Using demo data, the remote source is not configured or unavailable."


# Values outside the enumerations are kept as the raw source text.
OrgKindValue = Union[OrganizationKind, str]
DocKindValue = Union[DocumentKind, str]
PriorityValue = Union[Priority, str]


def enum_label(value: Union[Enum, str]) -> str:
    """Return the wire text for an enum member or a preserved raw value."""
    return value.value if isinstance(value, Enum) else value


@dataclass(slots=True, frozen=True)
class OrganizationRow:
    """One administrative record: a group, a character or a config entry."""

    kind: OrgKindValue
    name: str
    slug: str = ""
    group: str = ""
    description: str = ""

    @property
    def is_character(self) -> bool:
        return self.kind == OrganizationKind.CHARACTER


@dataclass(slots=True, frozen=True)
class DocumentRow:
    """One content item addressed to a character, a group or everyone."""

    kind: DocKindValue
    recipient: str
    title: str
    body: str = ""
    published_at: str = ""
    priority: PriorityValue = Priority.NORMAL

    @property
    def is_primary(self) -> bool:
        return self.priority == Priority.PRIMARY


def _text(data: Mapping[str, Any], key: str, fallback: str) -> str:
    # JSON null counts as missing
    value = data.get(key)
    return fallback if value is None else str(value)


@dataclass(slots=True)
class RunInfo:
    number: str = ""
    date: str = ""
    venue: str = ""
    address: str = ""


@dataclass(slots=True)
class EventConfig:
    """Event-wide configuration, derived from config-entry rows."""

    title: str = ""
    organizer: str = ""
    contact: str = ""
    footer: str = ""
    run: RunInfo = field(default_factory=RunInfo)
    sheets_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "organizer": self.organizer,
            "contact": self.contact,
            "footer": self.footer,
            "run": {
                "number": self.run.number,
                "date": self.run.date,
                "venue": self.run.venue,
                "address": self.run.address,
            },
            "sheets_url": self.sheets_url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], defaults: Optional["EventConfig"] = None) -> "EventConfig":
        """Build a config from its JSON form; missing keys come from ``defaults``."""
        base = defaults or cls()
        run_data = data.get("run") or {}
        if not isinstance(run_data, Mapping):
            run_data = {}
        run = RunInfo(
            number=_text(run_data, "number", base.run.number),
            date=_text(run_data, "date", base.run.date),
            venue=_text(run_data, "venue", base.run.venue),
            address=_text(run_data, "address", base.run.address),
        )
        return cls(
            title=_text(data, "title", base.title),
            organizer=_text(data, "organizer", base.organizer),
            contact=_text(data, "contact", base.contact),
            footer=_text(data, "footer", base.footer),
            run=run,
            sheets_url=_text(data, "sheets_url", base.sheets_url),
        )

    def copy(self, **changes: Any) -> "EventConfig":
        changes.setdefault("run", replace(self.run))
        return replace(self, **changes)


@dataclass(slots=True, frozen=True)
class EntitySnapshot:
    """Entity collections held for one render cycle, replaced as a whole."""

    organization: Tuple[OrganizationRow, ...]
    documents: Tuple[DocumentRow, ...]
    advisory: Optional[Advisory] = None
    source: str = "demo"

    @property
    def advisory_message(self) -> Optional[str]:
        return self.advisory.message if self.advisory else None

    def with_advisory(self, advisory: Optional[Advisory]) -> "EntitySnapshot":
        return replace(self, advisory=advisory)
