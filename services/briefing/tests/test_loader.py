import asyncio

import httpx

from larp_briefing.event_config import default_config
from larp_briefing.models import Advisory
from larp_briefing.loader import SnapshotLoader
from larp_briefing.refresher import BackgroundRefresh

SHEETS_URL = "https://docs.google.com/spreadsheets/d/abc123/gviz/tq?tqx=out:csv&sheet="


def _loader(fetcher, sheets_url=SHEETS_URL):
    return SnapshotLoader(fetcher, bootstrap=lambda: default_config(sheets_url=sheets_url))


def _refresh(loader):
    async def _run():
        try:
            return await loader.refresh()
        finally:
            await loader.fetcher.aclose()

    return asyncio.run(_run())


def test_loader_starts_with_demo_snapshot(tables_fetcher):
    loader = _loader(tables_fetcher({}))
    assert loader.snapshot.source == "demo"
    assert loader.snapshot.advisory is None
    assert loader.snapshot.documents


def test_refresh_uses_remote_tables(tables_fetcher, sheet_tables):
    loader = _loader(tables_fetcher(sheet_tables))
    snapshot = _refresh(loader)

    assert snapshot.source == "remote"
    assert snapshot.advisory is None
    assert len(snapshot.organization) == 7
    assert len(snapshot.documents) == 6
    assert loader.snapshot is snapshot


def test_missing_documents_table_falls_back_with_partial_advisory(tables_fetcher, sheet_tables):
    del sheet_tables["dokumenty"]
    snapshot = _refresh(_loader(tables_fetcher(sheet_tables)))

    assert snapshot.source == "demo"
    assert snapshot.advisory is Advisory.PARTIAL_DATA


def test_unconfigured_source_falls_back_to_demo(tables_fetcher, sheet_tables):
    snapshot = _refresh(_loader(tables_fetcher(sheet_tables), sheets_url=""))
    assert snapshot.source == "demo"
    assert snapshot.advisory is Advisory.DEMO_DATA


def test_unexpected_error_never_escapes_refresh(tables_fetcher):
    loader = _loader(tables_fetcher({}))

    async def explode(sheets_url, table):
        raise RuntimeError("parser exploded")

    loader.fetcher.fetch_table = explode
    snapshot = _refresh(loader)

    assert snapshot.source == "demo"
    assert snapshot.advisory is Advisory.DEMO_DATA


def test_sign_in_page_counts_as_missing(fetcher_with):
    def handler(request):
        return httpx.Response(200, text="<html><body>Sign in</body></html>")

    snapshot = _refresh(_loader(fetcher_with(handler)))
    assert snapshot.advisory is Advisory.DEMO_DATA


def test_background_refresh_replaces_snapshot(tables_fetcher, sheet_tables):
    loader = _loader(tables_fetcher(sheet_tables))
    refresher = BackgroundRefresh(loader, delay=0)

    async def _run():
        refresher.start()
        assert loader.snapshot.source == "demo"
        await refresher.wait()
        await refresher.stop()
        await loader.fetcher.aclose()

    asyncio.run(_run())
    assert loader.snapshot.source == "remote"


def test_stopping_cancels_pending_refresh(tables_fetcher, sheet_tables):
    loader = _loader(tables_fetcher(sheet_tables))
    refresher = BackgroundRefresh(loader, delay=60)

    async def _run():
        refresher.start()
        await refresher.stop()
        await loader.fetcher.aclose()

    asyncio.run(_run())
    assert loader.snapshot.source == "demo"
