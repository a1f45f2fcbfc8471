"""SQL-backed OTP store — same contract as the in-memory store, durable."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vidshare.models.otp_code import OTPCode
from vidshare.otp.store import Clock, OTPRecord, OTPStore, utc_now

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlOTPStore(OTPStore):
    """Encapsulates all database access for pending OTP codes.

    Each operation is a single statement in its own short-lived session,
    committed before returning.  Supports SQLite and PostgreSQL.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock or utc_now

    async def put(self, destination: str, code: str, ttl: timedelta) -> OTPRecord:
        now = self._clock()
        expires_at = now + ttl
        async with self._session_factory() as session:
            dialect = session.get_bind().dialect.name
            try:
                insert = _UPSERT_DIALECTS[dialect]
            except KeyError:
                raise ValueError(f"Unsupported database dialect: {dialect!r}") from None

            stmt = insert(OTPCode).values(
                destination=destination,
                code=code,
                expires_at=expires_at,
                created_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[OTPCode.destination],
                set_={
                    "code": stmt.excluded.code,
                    "expires_at": stmt.excluded.expires_at,
                    "created_at": stmt.excluded.created_at,
                },
            )
            await session.execute(stmt)
            await session.commit()
        return OTPRecord(destination=destination, code=code, expires_at=expires_at)

    async def get(self, destination: str) -> OTPRecord | None:
        async with self._session_factory() as session:
            row = await session.get(OTPCode, destination)
            if row is None:
                return None
            return OTPRecord(
                destination=row.destination,
                code=row.code,
                expires_at=_as_utc(row.expires_at),
            )

    async def remove(self, destination: str) -> None:
        stmt = delete(OTPCode).where(OTPCode.destination == destination)
        async with self._session_factory() as session:
            await session.execute(stmt)
            await session.commit()

    async def consume(self, destination: str, code: str) -> bool:
        stmt = delete(OTPCode).where(
            OTPCode.destination == destination, OTPCode.code == code
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
        return result.rowcount == 1
