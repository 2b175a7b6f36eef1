"""Runtime wiring for CLI and service entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import AppConfig, load_config
from .event_config import default_config, resolve_event_config
from .loader import SnapshotLoader
from .logging import configure_logging
from .models import EventConfig
from .refresher import BackgroundRefresh
from .settings_store import BootstrapSettings, JsonFileSettingsStore, SettingsStore
from .sheets import SheetsFetcher


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    settings: BootstrapSettings
    fetcher: SheetsFetcher
    loader: SnapshotLoader
    refresher: BackgroundRefresh

    def event_config(self) -> EventConfig:
        return resolve_event_config(self.loader.snapshot.organization, self.settings.current())

    async def aclose(self) -> None:
        await self.refresher.stop()
        await self.fetcher.aclose()


def build_runtime(
    config: AppConfig | None = None,
    store: Optional[SettingsStore] = None,
    fetcher: Optional[SheetsFetcher] = None,
    json_logs: bool = True,
) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, json_logs=json_logs)

    if store is None:
        store = JsonFileSettingsStore(cfg.settings_path)
    settings = BootstrapSettings(store, default_config(sheets_url=cfg.default_sheets_url))

    fetcher = fetcher or SheetsFetcher(timeout=cfg.http_timeout, user_agent=cfg.http_user_agent)
    loader = SnapshotLoader(fetcher, bootstrap=settings.current)
    refresher = BackgroundRefresh(loader, delay=cfg.startup_delay)

    return Runtime(
        config=cfg,
        settings=settings,
        fetcher=fetcher,
        loader=loader,
        refresher=refresher,
    )
