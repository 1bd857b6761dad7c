"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MAX_PROGRESS = 100
AMOUNT_QUANTUM = Decimal("0.01")
DEFAULT_SESSION_DAYS = 7
