from datetime import date
from decimal import Decimal

import pytest

from src.donation_system.donation_system.core.enums import CollectionStatus, DonationType
from src.donation_system.donation_system.donations.aggregator import aggregate_by_event
from src.donation_system.donation_system.donations.model import DonationRecord
from src.donation_system.donation_system.donations.status import (
    event_completion_label,
    event_status,
    record_status_label,
    status_css_class,
)


def _record(donation_id, status):
    return DonationRecord(
        donation_id=donation_id,
        user_id=1,
        amount=Decimal("10"),
        event_name="Funeral",
        event_date=date(2024, 3, 3),
        target_amount=Decimal("0"),
        status=status,
        donation_type=DonationType.SAD,
    )


def test_record_labels():
    assert record_status_label(CollectionStatus.PENDING) == "awaiting collection"
    assert record_status_label(CollectionStatus.COLLECTED) == "collected"
    assert record_status_label("pending") == "awaiting collection"


def test_css_classes():
    assert status_css_class(CollectionStatus.COLLECTED) == "bg-success"
    assert status_css_class(CollectionStatus.PENDING) == "bg-warning text-dark"
    assert status_css_class("collected") == "bg-success"
    with pytest.raises(ValueError):
        status_css_class("refunded")


def test_event_status_any_pending():
    assert event_status([_record(1, CollectionStatus.COLLECTED), _record(2, CollectionStatus.PENDING)]) == CollectionStatus.PENDING
    assert event_status([_record(1, CollectionStatus.COLLECTED)]) == CollectionStatus.COLLECTED
    assert event_status([]) == CollectionStatus.COLLECTED


def test_completion_label():
    pending = aggregate_by_event([_record(1, CollectionStatus.PENDING)])["Funeral"]
    done = aggregate_by_event([_record(1, CollectionStatus.COLLECTED)])["Funeral"]
    assert event_completion_label(pending) == "in progress"
    assert event_completion_label(done) == "complete"
