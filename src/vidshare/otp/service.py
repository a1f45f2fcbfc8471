"""OTP service — issues, delivers and verifies mobile verification codes."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from vidshare.otp.dev_probe import DevelopmentCodeProbe
from vidshare.otp.generator import NumericCodeGenerator
from vidshare.otp.store import Clock, OTPStore, utc_now
from vidshare.services.notifier import Notifier

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)


class OTPService:
    """Orchestrates the per-destination code lifecycle.

    Flow
    ----
    1. ``request_code`` generates a code, stores it with an expiry and
       launches delivery in the background.  A new request replaces any
       pending code for the same destination.
    2. ``verify`` succeeds at most once per issued code.  Wrong guesses
       leave the code in place until it expires; there is no attempt limit.
    3. An expired code is removed the first time ``verify`` sees it.

    Callers learn only ``True`` or ``False``; a missing, expired and wrong
    code all look the same.
    """

    def __init__(
        self,
        store: OTPStore,
        notifier: Notifier,
        generator: NumericCodeGenerator | None = None,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock | None = None,
        probe: DevelopmentCodeProbe | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._generator = generator or NumericCodeGenerator()
        self._ttl = ttl
        self._clock = clock or utc_now
        self._probe = probe
        self._pending: set[asyncio.Task[None]] = set()

    async def request_code(self, destination: str) -> None:
        """Issue a fresh code for *destination* and dispatch it.

        Returns once the code is stored; delivery outcome is never
        reported to the caller.
        """
        code = self._generator.generate()
        await self._store.put(destination, code, self._ttl)
        if self._probe is not None:
            self._probe.record(destination, code)
        logger.info("OTP issued for %s", destination)
        logger.debug("OTP for %s: %s", destination, code)

        task = asyncio.create_task(self._deliver(destination, self._format_message(code)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def verify(self, destination: str, candidate: str) -> bool:
        """Return ``True`` if *candidate* matches the live code, consuming it."""
        record = await self._store.get(destination)
        if record is None:
            logger.info("OTP verification failed for %s: nothing pending", destination)
            return False

        if record.is_expired(self._clock()):
            await self._store.remove(destination)
            logger.info("OTP expired for %s", destination)
            return False

        if candidate != record.code:
            logger.info("OTP verification failed for %s: code mismatch", destination)
            return False

        # One-time use; a concurrent verify may have consumed it first
        if not await self._store.consume(destination, candidate):
            logger.info("OTP for %s was already consumed", destination)
            return False

        logger.info("OTP verified for %s", destination)
        return True

    def peek_last_issued_code(self) -> str | None:
        """Most recent code issued to anyone; ``None`` outside development mode."""
        if self._probe is None:
            return None
        return self._probe.peek()

    async def drain(self) -> None:
        """Wait for all in-flight deliveries to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    # ── Private helpers ──────────────────────────────────

    def _format_message(self, code: str) -> str:
        minutes = max(1, int(self._ttl.total_seconds() // 60))
        unit = "minute" if minutes == 1 else "minutes"
        return (
            f"Your verification code is: {code}. "
            f"It will expire in {minutes} {unit}."
        )

    async def _deliver(self, destination: str, message: str) -> None:
        try:
            delivered = await self._notifier.deliver(destination, message)
        except Exception:
            logger.exception("Failed to deliver OTP to %s", destination)
            return
        if not delivered:
            logger.warning("Notifier reported OTP delivery failure for %s", destination)
