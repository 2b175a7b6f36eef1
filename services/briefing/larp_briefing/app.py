"""FastAPI application exposing resolved briefing content.

Bodies of documents are returned as stored in the sheet; sanitizing them
before display is the client's job.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from .logging import get_logger
from .models import EVERYONE, EventConfig, RunInfo
from .payloads import character_payload, document_payload, grouped_payload
from .runtime import Runtime, build_runtime
from .sheets import is_configured
from .stats import character_summaries, compute_stats
from .visibility import (
    documents_for,
    find_character,
    group_by_kind,
    order_documents,
    split_profile_blurb,
    visible_documents,
)

logger = get_logger(__name__)


class RunPayload(BaseModel):
    number: Optional[str] = None
    date: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None


class SettingsPayload(BaseModel):
    title: Optional[str] = None
    organizer: Optional[str] = None
    contact: Optional[str] = None
    footer: Optional[str] = None
    run: Optional[RunPayload] = None
    sheets_url: Optional[str] = None


def merge_settings(current: EventConfig, payload: SettingsPayload) -> EventConfig:
    data: dict[str, Any] = payload.model_dump(exclude_none=True)
    run = data.pop("run", None) or {}
    merged = current.copy(**data)
    merged.run = RunInfo(**{**asdict(current.run), **run})
    return merged


def create_app(runtime: Runtime | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = runtime or build_runtime()
        app.state.runtime = active
        try:
            if active.config.refresh_on_startup:
                active.refresher.start()
            yield
        finally:
            await active.aclose()

    api = FastAPI(title="LARP Briefing Service", version="1.0.0", lifespan=lifespan)

    def get_runtime(request: Request) -> Runtime:
        active: Runtime = request.app.state.runtime
        return active

    @api.get("/health")
    def health(active: Runtime = Depends(get_runtime)) -> dict:
        snapshot = active.loader.snapshot
        return {
            "status": "healthy",
            "source": snapshot.source,
            "sheets_configured": is_configured(active.settings.current().sheets_url),
            "advisory": snapshot.advisory_message,
        }

    @api.get("/config")
    def event_config(active: Runtime = Depends(get_runtime)) -> dict:
        return {
            "config": active.event_config().to_dict(),
            "advisory": active.loader.snapshot.advisory_message,
        }

    @api.get("/settings")
    def read_settings(active: Runtime = Depends(get_runtime)) -> dict:
        return active.settings.current().to_dict()

    @api.put("/settings")
    def save_settings(payload: SettingsPayload, active: Runtime = Depends(get_runtime)) -> dict:
        saved = active.settings.save(merge_settings(active.settings.current(), payload))
        return saved.to_dict()

    @api.get("/characters")
    def characters(active: Runtime = Depends(get_runtime)) -> dict:
        snapshot = active.loader.snapshot
        return {
            "characters": [asdict(summary) for summary in character_summaries(snapshot)],
            "advisory": snapshot.advisory_message,
        }

    @api.get("/characters/{slug}")
    def character_page(slug: str, active: Runtime = Depends(get_runtime)) -> dict:
        snapshot = active.loader.snapshot
        character = find_character(snapshot.organization, slug)
        if character is None:
            raise HTTPException(status_code=404, detail=f"Character '{slug}' not found")

        visible = visible_documents(snapshot.documents, slug, snapshot.organization)
        blurb, rest = split_profile_blurb(visible)
        return {
            "character": character_payload(character),
            "profile_blurb": document_payload(blurb) if blurb else None,
            "documents": grouped_payload(group_by_kind(order_documents(rest))),
            "config": active.event_config().to_dict(),
            "advisory": snapshot.advisory_message,
        }

    @api.get("/documents/{viewer}")
    def viewer_documents(viewer: str, active: Runtime = Depends(get_runtime)) -> dict:
        snapshot = active.loader.snapshot
        if viewer != EVERYONE and find_character(snapshot.organization, viewer) is None:
            raise HTTPException(status_code=404, detail=f"Character '{viewer}' not found")
        grouped = documents_for(snapshot.documents, viewer, snapshot.organization)
        return {
            "viewer": viewer,
            "documents": grouped_payload(grouped),
            "advisory": snapshot.advisory_message,
        }

    @api.get("/stats")
    def stats(active: Runtime = Depends(get_runtime)) -> dict:
        snapshot = active.loader.snapshot
        figures = compute_stats(snapshot, active.event_config())
        return {**asdict(figures), "advisory": snapshot.advisory_message}

    @api.post("/refresh")
    async def refresh(active: Runtime = Depends(get_runtime)) -> dict:
        """Fetch the sheets again, the manual counterpart of the startup refresh."""
        snapshot = await active.loader.refresh()
        return {
            "source": snapshot.source,
            "organization": len(snapshot.organization),
            "documents": len(snapshot.documents),
            "advisory": snapshot.advisory_message,
        }

    return api
