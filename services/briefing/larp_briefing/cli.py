"""Command-line interface for the briefing service."""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict
from typing import Any, Callable, Optional

import typer

from .logging import get_logger
from .models import EVERYONE, EntitySnapshot
from .payloads import character_payload, grouped_payload
from .runtime import Runtime, build_runtime
from .sheets import normalize_sheets_url
from .stats import character_summaries, compute_stats
from .visibility import documents_for, find_character

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="LARP briefing content from a published spreadsheet")


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _with_snapshot(fetch: bool, render: Callable[[Runtime, EntitySnapshot], Any]) -> Any:
    async def _run() -> Any:
        runtime = build_runtime(json_logs=False)
        try:
            snapshot = await runtime.loader.refresh() if fetch else runtime.loader.snapshot
            if snapshot.advisory:
                typer.secho(f"! {snapshot.advisory_message}", err=True, fg=typer.colors.YELLOW)
            return render(runtime, snapshot)
        finally:
            await runtime.aclose()

    return asyncio.run(_run())


def _grouped(snapshot: EntitySnapshot, viewer: str) -> dict:
    return grouped_payload(documents_for(snapshot.documents, viewer, snapshot.organization))


@app.command("show")
def show_command(
    slug: str = typer.Argument(..., help="Character slug"),
    offline: bool = typer.Option(False, "--offline", help="Use demo data, skip the sheets"),
) -> None:
    """Print the documents visible to one character."""

    def render(runtime: Runtime, snapshot: EntitySnapshot) -> Optional[dict]:
        character = find_character(snapshot.organization, slug)
        if character is None:
            return None
        return {
            "character": character_payload(character),
            "documents": _grouped(snapshot, slug),
        }

    payload = _with_snapshot(not offline, render)
    if payload is None:
        typer.secho(f"Character '{slug}' not found", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _echo_json(payload)


@app.command("everyone")
def everyone_command(
    offline: bool = typer.Option(False, "--offline", help="Use demo data, skip the sheets"),
) -> None:
    """Print the documents addressed to everyone."""
    _echo_json(_with_snapshot(not offline, lambda runtime, snapshot: _grouped(snapshot, EVERYONE)))


@app.command("characters")
def characters_command(
    offline: bool = typer.Option(False, "--offline", help="Use demo data, skip the sheets"),
) -> None:
    """List characters with their document counts."""
    _echo_json(
        _with_snapshot(
            not offline,
            lambda runtime, snapshot: [asdict(summary) for summary in character_summaries(snapshot)],
        )
    )


@app.command("config")
def config_command(
    offline: bool = typer.Option(False, "--offline", help="Use demo data, skip the sheets"),
) -> None:
    """Print the resolved event configuration."""
    _echo_json(_with_snapshot(not offline, lambda runtime, snapshot: runtime.event_config().to_dict()))


@app.command("stats")
def stats_command(
    offline: bool = typer.Option(False, "--offline", help="Use demo data, skip the sheets"),
) -> None:
    """Print the organizers' overview figures."""
    _echo_json(
        _with_snapshot(
            not offline,
            lambda runtime, snapshot: asdict(compute_stats(snapshot, runtime.event_config())),
        )
    )


@app.command("set-url")
def set_url_command(url: str = typer.Argument(..., help="Spreadsheet link, edit or export form")) -> None:
    """Store the spreadsheet address in the local settings file."""

    def render(runtime: Runtime, snapshot: EntitySnapshot) -> str:
        current = runtime.settings.current()
        return runtime.settings.save(current.copy(sheets_url=url)).sheets_url

    saved = _with_snapshot(False, render)
    typer.echo(f"Sheets URL saved: {saved}")


@app.command("fix-url")
def fix_url_command() -> None:
    """Rewrite a stored edit link into the CSV export form."""

    def render(runtime: Runtime, snapshot: EntitySnapshot) -> Optional[str]:
        current = runtime.settings.current()
        fixed = normalize_sheets_url(current.sheets_url)
        if fixed == current.sheets_url:
            return None
        return runtime.settings.save(current.copy(sheets_url=fixed)).sheets_url

    fixed = _with_snapshot(False, render)
    if fixed is None:
        typer.echo("Sheets URL is already in export form or missing")
    else:
        typer.echo(f"Sheets URL fixed: {fixed}")


@app.command("service")
def service_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Service bind host"),
    port: int = typer.Option(8000, "--port", help="Service port"),
) -> None:
    import uvicorn

    uvicorn.run(
        "larp_briefing.app:create_app",
        host=host,
        port=port,
        factory=True,
        log_level="info",
    )


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
