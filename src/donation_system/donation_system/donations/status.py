from __future__ import annotations

from typing import Iterable

from ..core.enums import CollectionStatus
from .model import DonationRecord, EventAggregate

_RECORD_LABELS = {
    CollectionStatus.PENDING: "awaiting collection",
    CollectionStatus.COLLECTED: "collected",
}

_CSS_CLASSES = {
    CollectionStatus.PENDING: "bg-warning text-dark",
    CollectionStatus.COLLECTED: "bg-success",
}


def record_status_label(status: CollectionStatus) -> str:
    return _RECORD_LABELS[CollectionStatus(status)]


def status_css_class(status: CollectionStatus) -> str:
    return _CSS_CLASSES[CollectionStatus(status)]


def event_status(records: Iterable[DonationRecord]) -> CollectionStatus:
    """Pending as soon as one record is pending, collected otherwise."""
    if any(r.status == CollectionStatus.PENDING for r in records):
        return CollectionStatus.PENDING
    return CollectionStatus.COLLECTED


def event_completion_label(event: EventAggregate) -> str:
    return "complete" if event.pending_count == 0 else "in progress"
