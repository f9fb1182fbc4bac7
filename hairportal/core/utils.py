"""
Utility helpers shared across services.
"""

import math
import secrets
import string
from datetime import datetime, timezone

_ID_ALPHABET = string.ascii_lowercase + string.digits


def make_id(length: int = 8) -> str:
    """Short random alphanumeric token used as a record id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def is_number(value) -> bool:
    """True for finite ints/floats; bools and numeric strings do not count."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
