"""OTP store — the mapping contract and its in-memory implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class OTPRecord:
    """A pending code for one destination (e.g. a mobile number)."""

    destination: str
    code: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class OTPStore(ABC):
    """Abstract mapping of ``destination → OTPRecord``.

    Implementations keep at most one record per destination; ``put``
    overwrites whatever was there.  Each operation must be atomic for a
    single key, nothing more.
    """

    @abstractmethod
    async def put(self, destination: str, code: str, ttl: timedelta) -> OTPRecord:
        """Insert or overwrite the record, expiring ``ttl`` from now."""

    @abstractmethod
    async def get(self, destination: str) -> OTPRecord | None:
        """Return the stored record, or ``None``.  No side effects."""

    @abstractmethod
    async def remove(self, destination: str) -> None:
        """Delete the record if present; no-op otherwise."""

    @abstractmethod
    async def consume(self, destination: str, code: str) -> bool:
        """Delete the record only if it still holds *code*.

        Returns ``True`` when this call removed it.  Of several overlapping
        calls for the same code, at most one gets ``True``.
        """


class InMemoryOTPStore(OTPStore):
    """Process-local OTP store backed by a plain dict.

    No operation awaits mid-way, so each one is atomic under the
    event loop.  Records vanish on restart.  Expired entries are not
    swept; callers remove them when they look them up.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._records: dict[str, OTPRecord] = {}
        self._clock = clock or utc_now

    async def put(self, destination: str, code: str, ttl: timedelta) -> OTPRecord:
        record = OTPRecord(
            destination=destination,
            code=code,
            expires_at=self._clock() + ttl,
        )
        self._records[destination] = record
        return record

    async def get(self, destination: str) -> OTPRecord | None:
        return self._records.get(destination)

    async def remove(self, destination: str) -> None:
        self._records.pop(destination, None)

    async def consume(self, destination: str, code: str) -> bool:
        record = self._records.get(destination)
        if record is None or record.code != code:
            return False
        del self._records[destination]
        return True

    def __len__(self) -> int:
        return len(self._records)
