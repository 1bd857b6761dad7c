from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import CollectionMethod, CollectionStatus, DonationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal
from .model import DonationRecord
from .repository import DonationRepository

_SELECT = """
    SELECT d.donation_id, d.user_id, d.type, d.amount, d.event_name, d.event_date,
           d.target_amount, d.status, d.collection_date, d.collection_method,
           d.wallet_id, d.notes, d.created_by, d.created_at,
           u.full_name
    FROM donations d
    LEFT JOIN users u ON u.user_id = d.user_id
"""


def _to_record(r: dict) -> DonationRecord:
    method = r.get("collection_method")
    return DonationRecord(
        donation_id=int(r["donation_id"]),
        user_id=int(r["user_id"]),
        amount=normalize_mysql_decimal(r["amount"]),
        event_name=r["event_name"],
        event_date=r["event_date"],
        target_amount=normalize_mysql_decimal(r.get("target_amount")),
        status=CollectionStatus(r["status"]),
        donation_type=DonationType(r["type"]),
        collection_date=r.get("collection_date"),
        collection_method=CollectionMethod(method) if method else None,
        contributor_name=r.get("full_name"),
        wallet_id=r.get("wallet_id"),
        notes=r.get("notes"),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
    )


class MySQLDonationRepository(DonationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[DonationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY d.created_at DESC, d.donation_id DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_type(self, donation_type: DonationType) -> Sequence[DonationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE d.type=%s
                ORDER BY d.created_at ASC, d.donation_id ASC
                """,
                (DonationType(donation_type).value,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, donation_id: int) -> Optional[DonationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE d.donation_id=%s", (int(donation_id),))
            r = fetchone(cur)
            if not r:
                return None
            return _to_record(r)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO donations(
                    user_id, type, amount, event_name, event_date, target_amount, status,
                    collection_date, collection_method, wallet_id, notes, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    donation_type.value,
                    amount,
                    event_name,
                    event_date,
                    target_amount,
                    status.value,
                    collection_date,
                    collection_method.value if collection_method else None,
                    wallet_id,
                    notes,
                    created_by,
                ),
            )
            return int(cur.lastrowid)

    def update_record(self, record: DonationRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE donations
                SET amount=%s, status=%s, collection_date=%s, collection_method=%s,
                    wallet_id=%s, notes=%s, updated_at=NOW()
                WHERE donation_id=%s
                """,
                (
                    record.amount,
                    record.status.value,
                    record.collection_date,
                    record.collection_method.value if record.collection_method else None,
                    record.wallet_id,
                    record.notes,
                    int(record.donation_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, donation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM donations WHERE donation_id=%s", (int(donation_id),))
            return cur.rowcount > 0
