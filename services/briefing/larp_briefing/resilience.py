"""Choice between fetched data and the fallback snapshot.

Pure: given the fallback snapshot and what the two fetches produced,
return the snapshot to display. Sources are never mixed; unless both
tables arrived, the fallback is kept whole and an advisory is attached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .models import Advisory, DocumentRow, EntitySnapshot, OrganizationRow


@dataclass(slots=True, frozen=True)
class FetchOutcome:
    organization: Sequence[OrganizationRow] = field(default_factory=tuple)
    documents: Sequence[DocumentRow] = field(default_factory=tuple)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "FetchOutcome":
        return cls(error=error)


def classify(outcome: FetchOutcome) -> Optional[Advisory]:
    """Return the advisory for ``outcome``; ``None`` means use the fetched data."""
    if outcome.error is not None:
        return Advisory.DEMO_DATA
    has_organization = len(outcome.organization) > 0
    has_documents = len(outcome.documents) > 0
    if has_organization and has_documents:
        return None
    if not has_organization and not has_documents:
        return Advisory.DEMO_DATA
    return Advisory.PARTIAL_DATA


def resolve_snapshot(fallback: EntitySnapshot, outcome: FetchOutcome) -> EntitySnapshot:
    advisory = classify(outcome)
    if advisory is None:
        return EntitySnapshot(
            organization=tuple(outcome.organization),
            documents=tuple(outcome.documents),
            advisory=None,
            source="remote",
        )
    return fallback.with_advisory(advisory)
