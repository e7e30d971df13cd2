"""System clock and id generator adapters."""

import secrets
import time
from datetime import date, datetime, timezone

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return "".join(reversed(digits))


class SystemClock:
    """Implements Clock protocol using the host clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return date.today()


class TimestampIdGenerator:
    """
    Implements IdGenerator protocol.

    Ids are the millisecond timestamp in base36 plus 4 random base36 characters.
    """

    def new_id(self) -> str:
        millis = time.time_ns() // 1_000_000
        suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
        return to_base36(millis) + suffix
