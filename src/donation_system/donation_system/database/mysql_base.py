from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_decimal(value: Any) -> Decimal:
    """Normalize MySQL DECIMAL values across connector implementations.

    mysql-connector usually returns DECIMAL as decimal.Decimal, but the
    C extension and some proxies hand back:
    - str (e.g. '150000.00')
    - float
    - None for a NULL column (treated as zero)
    """

    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    if isinstance(value, (int, float, str)):
        return Decimal(str(value))

    raise TypeError(f"Unsupported MySQL DECIMAL value type: {type(value)!r}")
