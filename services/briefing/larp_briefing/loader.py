"""Fetch, parse and normalize both sheet tables into the current snapshot."""

from __future__ import annotations

import asyncio
from typing import Callable

from .csv_parser import parse_rows
from .demo import demo_snapshot
from .logging import get_logger
from .models import EntitySnapshot, EventConfig
from .normalizer import normalize_documents, normalize_organization
from .resilience import FetchOutcome, resolve_snapshot
from .sheets import DOCUMENTS_TABLE, ORGANIZATION_TABLE, SheetsFetcher

logger = get_logger(__name__)


class SnapshotLoader:
    """Holds the snapshot consumers read and replaces it after each refresh.

    Starts out with the demo snapshot so there is always something to
    show. A refresh never raises; failures end up as an advisory on the
    fallback snapshot.
    """

    def __init__(
        self,
        fetcher: SheetsFetcher,
        bootstrap: Callable[[], EventConfig],
        fallback: Callable[[], EntitySnapshot] = demo_snapshot,
    ) -> None:
        self.fetcher = fetcher
        self.bootstrap = bootstrap
        self.fallback = fallback
        self._snapshot = fallback()

    @property
    def snapshot(self) -> EntitySnapshot:
        return self._snapshot

    async def fetch_outcome(self) -> FetchOutcome:
        sheets_url = self.bootstrap().sheets_url
        organization_csv, documents_csv = await asyncio.gather(
            self.fetcher.fetch_table(sheets_url, ORGANIZATION_TABLE),
            self.fetcher.fetch_table(sheets_url, DOCUMENTS_TABLE),
        )
        return FetchOutcome(
            organization=tuple(normalize_organization(parse_rows(organization_csv))),
            documents=tuple(normalize_documents(parse_rows(documents_csv))),
        )

    async def refresh(self) -> EntitySnapshot:
        logger.info("refresh_start")
        try:
            outcome = await self.fetch_outcome()
        except Exception as exc:
            logger.error("refresh_failed", error=str(exc), exc_info=True)
            outcome = FetchOutcome.failed(str(exc))

        snapshot = resolve_snapshot(self.fallback(), outcome)
        self._snapshot = snapshot
        logger.info(
            "snapshot_resolved",
            source=snapshot.source,
            organization=len(outcome.organization),
            documents=len(outcome.documents),
            advisory=snapshot.advisory.value if snapshot.advisory else None,
        )
        return snapshot
