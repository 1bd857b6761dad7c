from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import coerce_date, today_local
from ..common.validators import AmountInput, optional_text, parse_amount, parse_optional_id, require_non_empty
from ..core.enums import CollectionMethod, CollectionStatus, DonationType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .aggregator import aggregate_by_event
from .model import DonationRecord, EventAggregate
from ..users.repository import UserRepository
from .repository import DonationRepository

logger = logging.getLogger(__name__)


def parse_donation_type(value: Union[str, DonationType]) -> DonationType:
    try:
        return DonationType((value or "").strip().lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValidationError("Invalid donation type")


def parse_collection_status(value: Union[str, CollectionStatus, None]) -> Optional[CollectionStatus]:
    """Blank or 'all' means no status filter."""
    if value is None or isinstance(value, CollectionStatus):
        return value
    v = value.strip().lower()
    if not v or v == "all":
        return None
    try:
        return CollectionStatus(v)
    except ValueError:
        raise ValidationError("Invalid collection status")


def normalize_collection_method(value: Union[str, CollectionMethod, None]) -> CollectionMethod:
    """Anything that is not an explicit transfer is recorded as cash."""
    if isinstance(value, CollectionMethod):
        return value
    if (value or "").strip().lower() == CollectionMethod.TRANSFER.value:
        return CollectionMethod.TRANSFER
    return CollectionMethod.CASH


class DonationEventService:
    """Use cases: browse donation events and record/collect contributions.

    Reads always aggregate a fresh snapshot from the repository; nothing is
    cached between calls.
    """

    def __init__(self, donations: DonationRepository, users: UserRepository):
        self._donations = donations
        self._users = users

    # -------- Queries --------
    def list_records(self, donation_type: Union[str, DonationType]) -> Sequence[DonationRecord]:
        return self._donations.list_by_type(parse_donation_type(donation_type))

    def list_all_records(self) -> Sequence[DonationRecord]:
        return self._donations.list_all()

    def get_record(self, donation_id: int) -> DonationRecord:
        return self._require(donation_id)

    def list_events(
        self,
        donation_type: Union[str, DonationType],
        *,
        search: str = "",
        status: Union[str, CollectionStatus, None] = None,
    ) -> list[EventAggregate]:
        dtype = parse_donation_type(donation_type)
        status_filter = parse_collection_status(status)
        needle = (search or "").strip().lower()

        events = list(aggregate_by_event(self._donations.list_by_type(dtype)).values())
        for event in events:
            self._warn_if_inconsistent(event)

        if needle:
            events = [e for e in events if needle in e.event_name.lower()]
        if status_filter is not None:
            events = [e for e in events if e.status == status_filter]
        return events

    def get_event(self, donation_type: Union[str, DonationType], event_name: str) -> Optional[EventAggregate]:
        """Return the event or None; unknown names are not an error."""
        dtype = parse_donation_type(donation_type)
        records = [r for r in self._donations.list_by_type(dtype) if r.event_name == event_name]
        if not records:
            return None

        event = aggregate_by_event(records)[event_name]
        self._warn_if_inconsistent(event)
        return event

    @staticmethod
    def _warn_if_inconsistent(event: EventAggregate) -> None:
        if event.inconsistent_fields:
            logger.warning(
                "donation event %r (%s) has rows disagreeing on %s; using values from donation %s",
                event.event_name,
                event.donation_type.value,
                ", ".join(event.inconsistent_fields),
                event.event_id,
            )

    # -------- Writes --------
    def create_record(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        donation_type: Union[str, DonationType],
        amount: AmountInput,
        event_name: str,
        event_date: Union[str, date],
        target_amount: AmountInput = None,
        status: Union[str, CollectionStatus] = CollectionStatus.PENDING,
        collection_date: Union[str, date, None] = None,
        collection_method: Union[str, CollectionMethod, None] = None,
        user_id: Optional[int] = None,
        wallet_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        dtype = parse_donation_type(donation_type)
        name = require_non_empty(event_name, "Event name")
        parsed_amount = parse_amount(amount, "Amount")
        parsed_target = parse_amount(target_amount, "Target amount", allow_blank=True)
        parsed_event_date = coerce_date(event_date, "Event date")
        parsed_status = parse_collection_status(status) or CollectionStatus.PENDING
        contributor_id = parse_optional_id(user_id, "Member") or int(current_user_id)
        parsed_wallet_id = parse_optional_id(wallet_id, "Wallet")

        if parsed_status == CollectionStatus.COLLECTED:
            if current_role != Role.ADMIN:
                raise AuthorizationError("Only admins can confirm a collection")
            parsed_collection_date = (
                coerce_date(collection_date, "Collection date") if collection_date else today_local()
            )
            method: Optional[CollectionMethod] = normalize_collection_method(collection_method)
        else:
            if collection_date or collection_method:
                raise ValidationError("Collection details are only allowed for collected donations")
            parsed_collection_date = None
            method = None

        if self._users.get_by_id(contributor_id) is None:
            raise NotFoundError("Member not found")

        donation_id = self._donations.create_record(
            user_id=contributor_id,
            donation_type=dtype,
            amount=parsed_amount,
            event_name=name,
            event_date=parsed_event_date,
            target_amount=parsed_target,
            status=parsed_status,
            collection_date=parsed_collection_date,
            collection_method=method,
            wallet_id=parsed_wallet_id,
            notes=optional_text(notes),
            created_by=int(current_user_id),
        )
        logger.info("created %s donation %s for event %r (%s)", dtype.value, donation_id, name, parsed_status.value)
        return donation_id

    def mark_collected(
        self,
        *,
        current_role: Role,
        donation_id: int,
        collection_date: Union[str, date, None] = None,
        collection_method: Union[str, CollectionMethod, None] = None,
        wallet_id: Optional[int] = None,
    ) -> DonationRecord:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can confirm a collection")

        record = self._require(donation_id)
        # Collection is final: there is no way back to pending.
        if record.status == CollectionStatus.COLLECTED:
            raise ValidationError("Donation has already been collected")

        updated = replace(
            record,
            status=CollectionStatus.COLLECTED,
            collection_date=coerce_date(collection_date, "Collection date") if collection_date else today_local(),
            collection_method=normalize_collection_method(collection_method),
            wallet_id=parse_optional_id(wallet_id, "Wallet") or record.wallet_id,
        )
        if not self._donations.update_record(updated):
            raise NotFoundError("Donation not found")

        logger.info("donation %s for event %r marked collected", record.donation_id, record.event_name)
        return updated

    def update_amount(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        donation_id: int,
        amount: AmountInput,
    ) -> DonationRecord:
        record = self._require(donation_id)
        self._check_owner(record, current_user_id=current_user_id, current_role=current_role)

        updated = replace(record, amount=parse_amount(amount, "Amount"))
        if not self._donations.update_record(updated):
            raise NotFoundError("Donation not found")
        return updated

    def delete_record(self, *, current_user_id: int, current_role: Role, donation_id: int) -> None:
        record = self._require(donation_id)
        self._check_owner(record, current_user_id=current_user_id, current_role=current_role)

        if not self._donations.delete_by_id(record.donation_id):
            raise NotFoundError("Donation not found")
        logger.info("donation %s deleted by user %s", record.donation_id, current_user_id)

    def _require(self, donation_id: int) -> DonationRecord:
        record = self._donations.get_by_id(int(donation_id))
        if not record:
            raise NotFoundError("Donation not found")
        return record

    @staticmethod
    def _check_owner(record: DonationRecord, *, current_user_id: int, current_role: Role) -> None:
        if current_role == Role.ADMIN:
            return
        owner = record.created_by if record.created_by is not None else record.user_id
        if owner != int(current_user_id):
            raise AuthorizationError("You can only change your own donations")
