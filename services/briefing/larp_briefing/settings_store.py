"""Local key-value store holding the bootstrap event configuration.

The store is a port: the resolver and the runtime only need ``get`` and
``put``. ``JsonFileSettingsStore`` keeps every key in one JSON file and
survives restarts; ``MemorySettingsStore`` keeps
everything in memory and is what the tests use.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .logging import get_logger
from .models import EventConfig
from .sheets import normalize_sheets_url

logger = get_logger(__name__)

CONFIG_KEY = "larpConfig"


class SettingsStore(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def put(self, key: str, value: Any) -> None:
        ...


class MemorySettingsStore:
    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileSettingsStore:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("settings_file_invalid", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("settings_file_invalid", path=str(self.path), error="not a JSON object")
            return {}
        return data

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read_all().get(key)

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        logger.info("settings_saved", path=str(self.path), key=key)


def load_bootstrap_config(store: SettingsStore, default: EventConfig) -> EventConfig:
    """Read the persisted configuration, writing ``default`` back when absent."""
    stored = store.get(CONFIG_KEY)
    if stored is None:
        store.put(CONFIG_KEY, default.to_dict())
        return default.copy()

    if isinstance(stored, str):
        try:
            stored = json.loads(stored)
        except json.JSONDecodeError:
            logger.warning("bootstrap_config_invalid", key=CONFIG_KEY)
            return default.copy()

    if not isinstance(stored, dict):
        logger.warning("bootstrap_config_invalid", key=CONFIG_KEY)
        return default.copy()

    return EventConfig.from_dict(stored, defaults=default)


def save_bootstrap_config(store: SettingsStore, config: EventConfig) -> None:
    store.put(CONFIG_KEY, config.to_dict())


class BootstrapSettings:
    """Bootstrap configuration: read once at startup, written on explicit save."""

    def __init__(self, store: SettingsStore, default: EventConfig) -> None:
        self.store = store
        self._config = load_bootstrap_config(store, default)

    def current(self) -> EventConfig:
        return self._config

    def save(self, config: EventConfig) -> EventConfig:
        """Persist a user edit; an edit link is rewritten to the export form first."""
        config = config.copy(sheets_url=normalize_sheets_url(config.sheets_url))
        save_bootstrap_config(self.store, config)
        self._config = config
        logger.info("bootstrap_saved", sheets_url=config.sheets_url)
        return config
