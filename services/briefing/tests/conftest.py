from pathlib import Path

import httpx
import pytest

from larp_briefing.config import AppConfig
from larp_briefing.runtime import build_runtime
from larp_briefing.settings_store import MemorySettingsStore
from larp_briefing.sheets import SheetsFetcher

FIXTURES = Path(__file__).parent / "fixtures"

SHEETS_URL = "https://docs.google.com/spreadsheets/d/abc123/gviz/tq?tqx=out:csv&sheet="


def fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def sheet_handler(tables: dict):
    """Mock transport handler answering ``?sheet=<table>`` from ``tables``."""

    def handler(request: httpx.Request) -> httpx.Response:
        table = request.url.params.get("sheet", "")
        body = tables.get(table)
        if body is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=body)

    return handler


def mock_fetcher(handler) -> SheetsFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SheetsFetcher(timeout=10.0, client=client)


@pytest.fixture()
def sheet_tables():
    return {
        "organizace": fixture_text("organizace.csv"),
        "dokumenty": fixture_text("dokumenty.csv"),
    }


@pytest.fixture()
def app_config(tmp_path):
    return AppConfig(
        settings_path=tmp_path / "settings.json",
        default_sheets_url=SHEETS_URL,
        http_timeout=10.0,
        http_user_agent="larp-briefing-tests",
        startup_delay=0.0,
        refresh_on_startup=False,
        log_level="WARNING",
    )


@pytest.fixture()
def make_runtime(app_config):
    def _make(tables: dict, sheets_url: str = SHEETS_URL):
        store = MemorySettingsStore()
        runtime = build_runtime(app_config, store=store, fetcher=mock_fetcher(sheet_handler(tables)))
        runtime.settings.save(runtime.settings.current().copy(sheets_url=sheets_url))
        return runtime

    return _make


@pytest.fixture()
def fetcher_with():
    """Build a fetcher whose HTTP traffic goes to ``handler``."""
    return mock_fetcher


@pytest.fixture()
def tables_fetcher():
    """Build a fetcher serving the given ``{table: csv}`` mapping."""
    return lambda tables: mock_fetcher(sheet_handler(tables))
