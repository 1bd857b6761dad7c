from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import CollectionMethod, CollectionStatus, DonationType
from .model import DonationRecord


class DonationRepository(Protocol):
    """Repository interface for donation rows.

    The service depends on this Protocol; the MySQL class is wired in the container.
    """

    def list_all(self) -> Sequence[DonationRecord]:
        """Every row of every type, newest first."""

        raise NotImplementedError

    def list_by_type(self, donation_type: DonationType) -> Sequence[DonationRecord]:
        """Snapshot of every row of one type, oldest first."""

        raise NotImplementedError

    def get_by_id(self, donation_id: int) -> Optional[DonationRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        user_id: int,
        donation_type: DonationType,
        amount: Decimal,
        event_name: str,
        event_date: date,
        target_amount: Decimal,
        status: CollectionStatus,
        collection_date: Optional[date] = None,
        collection_method: Optional[CollectionMethod] = None,
        wallet_id: Optional[int] = None,
        notes: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update_record(self, record: DonationRecord) -> bool:
        """Persist amount, status and collection metadata of an existing row."""

        raise NotImplementedError

    def delete_by_id(self, donation_id: int) -> bool:
        raise NotImplementedError
