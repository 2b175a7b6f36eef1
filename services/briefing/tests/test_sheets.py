import asyncio

import httpx

from larp_briefing.sheets import (
    SheetsFetcher,
    export_base_url,
    is_configured,
    normalize_sheets_url,
)

EXPORT = "https://docs.google.com/spreadsheets/d/1AbC-d_9/gviz/tq?tqx=out:csv&sheet="
EDIT = "https://docs.google.com/spreadsheets/d/1AbC-d_9/edit#gid=0"


def _fetch(handler, url=EXPORT, table="organizace"):
    async def _run():
        fetcher = SheetsFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        try:
            return await fetcher.fetch_table(url, table)
        finally:
            await fetcher.aclose()

    return asyncio.run(_run())


def test_placeholder_and_blank_urls_are_not_configured():
    assert not is_configured("")
    assert not is_configured("   ")
    assert not is_configured(None)
    assert not is_configured("https://docs.google.com/spreadsheets/d/EXAMPLE/gviz/tq?sheet=")
    assert is_configured(EXPORT)


def test_edit_links_are_rewritten_to_export_form():
    assert export_base_url(EDIT) == EXPORT
    assert export_base_url("https://docs.google.com/spreadsheets/d/1AbC-d_9/view#gid=12") == EXPORT
    assert export_base_url(EXPORT) == EXPORT
    assert export_base_url("https://example.com/sheet/edit") is None
    assert export_base_url("") is None


def test_normalize_sheets_url_leaves_unfixable_input_alone():
    assert normalize_sheets_url(EDIT) == EXPORT
    assert normalize_sheets_url(" " + EXPORT + " ") == EXPORT
    assert normalize_sheets_url("https://example.com/sheet/edit") == "https://example.com/sheet/edit"


def test_unconfigured_source_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, text="a,b\n1,2\n")

    assert _fetch(handler, url="") == ""
    assert _fetch(handler, url="https://docs.google.com/spreadsheets/d/EXAMPLE/x") == ""
    assert calls == []


def test_fetch_appends_table_name_to_endpoint():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text="kind,name\ngroup,Red\n")

    assert _fetch(handler, url=EDIT, table="dokumenty") == "kind,name\ngroup,Red\n"
    assert seen == [EXPORT + "dokumenty"]


def test_http_error_status_yields_empty_result():
    assert _fetch(lambda request: httpx.Response(500, text="oops")) == ""
    assert _fetch(lambda request: httpx.Response(404)) == ""


def test_timeout_and_network_errors_yield_empty_result():
    def timeout(request):
        raise httpx.ReadTimeout("too slow", request=request)

    def unreachable(request):
        raise httpx.ConnectError("no route", request=request)

    assert _fetch(timeout) == ""
    assert _fetch(unreachable) == ""


def test_empty_body_and_sign_in_page_yield_empty_result():
    assert _fetch(lambda request: httpx.Response(200, text="  \n")) == ""
    sign_in = "<!DOCTYPE html><html><body>Sign in - Google Accounts</body></html>"
    assert _fetch(lambda request: httpx.Response(200, text=sign_in)) == ""
