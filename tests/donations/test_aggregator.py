from __future__ import annotations

import random
from datetime import date
from decimal import Decimal

from src.donation_system.donation_system.core.enums import CollectionStatus, DonationType
from src.donation_system.donation_system.donations.aggregator import aggregate_by_event
from src.donation_system.donation_system.donations.model import DonationRecord


def _record(donation_id, event_name, amount, status=CollectionStatus.COLLECTED, *, target="0", event_date=date(2024, 6, 1)):
    return DonationRecord(
        donation_id=donation_id,
        user_id=donation_id + 100,
        amount=Decimal(str(amount)),
        event_name=event_name,
        event_date=event_date,
        target_amount=Decimal(target),
        status=status,
        donation_type=DonationType.FUNDRAISING,
        collection_date=date(2024, 6, 2) if status == CollectionStatus.COLLECTED else None,
    )


def test_empty_input_gives_empty_mapping():
    assert aggregate_by_event([]) == {}


def test_bazaar_with_one_pending_contribution_is_pending():
    events = aggregate_by_event(
        [
            _record(1, "Bazaar", 100, CollectionStatus.COLLECTED),
            _record(2, "Bazaar", 50, CollectionStatus.PENDING),
        ]
    )

    bazaar = events["Bazaar"]
    assert bazaar.total_amount == Decimal("150")
    assert bazaar.status == CollectionStatus.PENDING
    assert [r.donation_id for r in bazaar.contributors] == [1, 2]


def test_one_aggregate_per_distinct_event_in_first_seen_order():
    records = [
        _record(1, "Temple repair", 10),
        _record(2, "Bazaar", 20),
        _record(3, "Temple repair", 30),
        _record(4, "Wedding", 40),
        _record(5, "Bazaar", 50),
    ]

    events = aggregate_by_event(records)

    assert list(events) == ["Temple repair", "Bazaar", "Wedding"]
    assert events["Temple repair"].total_amount == Decimal("40")
    assert events["Temple repair"].event_id == 1
    assert events["Bazaar"].event_id == 2


def test_event_name_grouping_is_exact():
    events = aggregate_by_event([_record(1, "Bazaar", 10), _record(2, "bazaar", 10), _record(3, "Bazaar ", 10)])
    assert len(events) == 3


def test_total_does_not_depend_on_input_order():
    records = [_record(i, "Bazaar", amount) for i, amount in enumerate(["0.10", "0.20", "1500.55", "7", "12.35"], 1)]
    expected = aggregate_by_event(records)["Bazaar"].total_amount

    rng = random.Random(7)
    for _ in range(5):
        shuffled = records[:]
        rng.shuffle(shuffled)
        assert aggregate_by_event(shuffled)["Bazaar"].total_amount == expected
    assert expected == Decimal("1520.20")


def test_status_is_collected_only_when_all_collected():
    events = aggregate_by_event(
        [
            _record(1, "A", 1, CollectionStatus.PENDING),
            _record(2, "A", 1, CollectionStatus.COLLECTED),
            _record(3, "B", 1, CollectionStatus.COLLECTED),
            _record(4, "B", 1, CollectionStatus.COLLECTED),
        ]
    )
    # Pending first then collected must not flip back.
    assert events["A"].status == CollectionStatus.PENDING
    assert events["B"].status == CollectionStatus.COLLECTED


def test_first_record_seeds_date_and_target_and_flags_divergence():
    events = aggregate_by_event(
        [
            _record(1, "Bazaar", 10, target="500", event_date=date(2024, 6, 1)),
            _record(2, "Bazaar", 10, target="800", event_date=date(2024, 6, 1)),
            _record(3, "Bazaar", 10, target="500", event_date=date(2024, 6, 9)),
        ]
    )

    bazaar = events["Bazaar"]
    assert bazaar.target_amount == Decimal("500")
    assert bazaar.event_date == date(2024, 6, 1)
    assert bazaar.inconsistent_fields == ["target_amount", "event_date"]


def test_consistent_event_has_no_flags():
    events = aggregate_by_event([_record(1, "Bazaar", 10, target="500"), _record(2, "Bazaar", 5, target="500")])
    assert events["Bazaar"].inconsistent_fields == []


def test_aggregation_is_idempotent():
    records = [_record(1, "Bazaar", 100), _record(2, "Bazaar", 50, CollectionStatus.PENDING), _record(3, "Wedding", 5)]
    assert aggregate_by_event(records) == aggregate_by_event(records)


def test_derived_counts_and_progress():
    event = aggregate_by_event(
        [
            _record(1, "Bazaar", 100, target="1000"),
            _record(2, "Bazaar", 25, CollectionStatus.PENDING, target="1000"),
        ]
    )["Bazaar"]

    assert event.collected_count == 1
    assert event.pending_count == 1
    assert event.progress == 13
    assert event.is_complete is False
