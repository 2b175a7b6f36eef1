"""Content resolution core for the LARP briefing service."""

__all__ = [
    "config",
    "models",
    "sheets",
    "csv_parser",
    "dates",
    "normalizer",
    "event_config",
    "settings_store",
    "visibility",
    "resilience",
    "demo",
    "loader",
    "refresher",
    "stats",
    "runtime",
    "app",
    "cli",
]
