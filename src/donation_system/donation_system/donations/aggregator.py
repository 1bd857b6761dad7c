from __future__ import annotations

from typing import Iterable

from ..core.enums import CollectionStatus
from .model import DonationRecord, EventAggregate


def _check_consistency(event: EventAggregate, record: DonationRecord) -> None:
    # Every row of one event should carry the same date and target.
    if record.event_date != event.event_date and "event_date" not in event.inconsistent_fields:
        event.inconsistent_fields.append("event_date")
    if record.target_amount != event.target_amount and "target_amount" not in event.inconsistent_fields:
        event.inconsistent_fields.append("target_amount")


def aggregate_by_event(records: Iterable[DonationRecord]) -> dict[str, EventAggregate]:
    """Group records of one donation type by exact event name.

    The first record of each event seeds date, target and id; later records
    only add their amount and can downgrade the status to pending. The
    returned dict keeps the order in which event names first appeared.
    """

    events: dict[str, EventAggregate] = {}

    for record in records:
        event = events.get(record.event_name)
        if event is None:
            event = EventAggregate(
                event_id=record.donation_id,
                event_name=record.event_name,
                event_date=record.event_date,
                target_amount=record.target_amount,
                donation_type=record.donation_type,
                status=record.status,
            )
            events[record.event_name] = event
        else:
            _check_consistency(event, record)

        event.total_amount += record.amount
        event.contributors.append(record)
        if record.status == CollectionStatus.PENDING:
            event.status = CollectionStatus.PENDING

    return events
