from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    ADMIN = "admin"
    MEMBER = "member"


class DonationType(str, Enum):
    """Category partition; aggregation never crosses types."""

    HAPPY = "happy"
    SAD = "sad"
    FUNDRAISING = "fundraising"


class CollectionStatus(str, Enum):
    """Per-record collection state stored in the database."""

    COLLECTED = "collected"
    PENDING = "pending"


class CollectionMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
