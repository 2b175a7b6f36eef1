"""Derivation of the event configuration from config-entry rows."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from .config import PLACEHOLDER_SHEETS_URL
from .logging import get_logger
from .models import EventConfig, OrganizationKind, OrganizationRow, RunInfo
from .normalizer import coerce_enum

logger = get_logger(__name__)


class ConfigKey(str, Enum):
    TITLE = "title"
    ORGANIZER = "organizer"
    CONTACT = "contact"
    FOOTER = "footer"
    RUN_NUMBER = "run-number"
    RUN_DATE = "run-date"
    RUN_VENUE = "run-venue"
    RUN_ADDRESS = "run-address"


CONFIG_KEY_ALIASES = {
    "nazev": ConfigKey.TITLE,
    "organizator": ConfigKey.ORGANIZER,
    "kontakt": ConfigKey.CONTACT,
    "zapati": ConfigKey.FOOTER,
    "beh_cislo": ConfigKey.RUN_NUMBER,
    "beh_datum": ConfigKey.RUN_DATE,
    "beh_misto": ConfigKey.RUN_VENUE,
    "beh_adresa": ConfigKey.RUN_ADDRESS,
    "run_number": ConfigKey.RUN_NUMBER,
    "run_date": ConfigKey.RUN_DATE,
    "run_venue": ConfigKey.RUN_VENUE,
    "run_address": ConfigKey.RUN_ADDRESS,
}

DEFAULT_CONFIG = EventConfig(
    title="Briefing",
    organizer="Organizers",
    contact="organizers@example.com",
    footer="Classified - authorised participants only",
    run=RunInfo(number="1", date="", venue="", address=""),
    sheets_url=PLACEHOLDER_SHEETS_URL,
)


def default_config(sheets_url: Optional[str] = None) -> EventConfig:
    """Return a fresh copy of the hard-coded defaults."""
    if sheets_url is None:
        return DEFAULT_CONFIG.copy()
    return DEFAULT_CONFIG.copy(sheets_url=sheets_url)


def _apply(config: EventConfig, key: ConfigKey, value: str) -> None:
    if key is ConfigKey.TITLE:
        config.title = value
    elif key is ConfigKey.ORGANIZER:
        config.organizer = value
    elif key is ConfigKey.CONTACT:
        config.contact = value
    elif key is ConfigKey.FOOTER:
        config.footer = value
    elif key is ConfigKey.RUN_NUMBER:
        config.run.number = value
    elif key is ConfigKey.RUN_DATE:
        config.run.date = value
    elif key is ConfigKey.RUN_VENUE:
        config.run.venue = value
    elif key is ConfigKey.RUN_ADDRESS:
        config.run.address = value


def resolve_event_config(
    organization: Iterable[OrganizationRow],
    bootstrap: Optional[EventConfig] = None,
) -> EventConfig:
    """Build the configuration from config-entry rows.

    Without any config-entry rows the hard-coded defaults are returned
    unchanged. Otherwise fields start from the defaults, the sheets URL is
    carried over from ``bootstrap`` (the sheet never carries its own
    address) and each row assigns its ``group`` value to the field named by
    its ``name``, in source order. Unknown keys are ignored.
    """
    config_rows = [row for row in organization if row.kind == OrganizationKind.CONFIG_ENTRY]
    if not config_rows:
        logger.debug("no_config_rows")
        return default_config()

    sheets_url = bootstrap.sheets_url if bootstrap is not None else DEFAULT_CONFIG.sheets_url
    config = default_config(sheets_url=sheets_url)

    for row in config_rows:
        key = coerce_enum(ConfigKey, row.name, CONFIG_KEY_ALIASES)
        if not isinstance(key, ConfigKey):
            logger.debug("unknown_config_key", key=row.name)
            continue
        _apply(config, key, row.group)

    return config
