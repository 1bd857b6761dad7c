from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import CollectionMethod, CollectionStatus, DonationType
from .progress import progress


@dataclass(frozen=True)
class DonationRecord:
    """Domain entity: one contribution row.

    Built once at the store boundary; downstream code trusts its shape.
    """

    donation_id: int
    user_id: int
    amount: Decimal
    event_name: str
    event_date: date
    target_amount: Decimal
    status: CollectionStatus
    donation_type: DonationType
    collection_date: Optional[date] = None
    collection_method: Optional[CollectionMethod] = None
    contributor_name: Optional[str] = None
    wallet_id: Optional[int] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == CollectionStatus.PENDING


@dataclass
class EventAggregate:
    """Read-model: all records sharing one event name, computed on read."""

    event_id: int
    event_name: str
    event_date: date
    target_amount: Decimal
    donation_type: DonationType
    status: CollectionStatus
    total_amount: Decimal = Decimal("0")
    contributors: list[DonationRecord] = field(default_factory=list)
    inconsistent_fields: list[str] = field(default_factory=list)

    @property
    def progress(self) -> int:
        return progress(self.total_amount, self.target_amount)

    @property
    def collected_count(self) -> int:
        return sum(1 for r in self.contributors if not r.is_pending)

    @property
    def pending_count(self) -> int:
        return sum(1 for r in self.contributors if r.is_pending)

    @property
    def is_complete(self) -> bool:
        return self.status == CollectionStatus.COLLECTED
