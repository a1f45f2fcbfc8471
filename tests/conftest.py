"""Shared test helpers: a controllable clock, a scripted code generator and
both OTP store backends."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from vidshare.config import Settings
from vidshare.database.engine import init_db, make_engine, make_session_factory
from vidshare.otp.sql_store import SqlOTPStore
from vidshare.otp.store import InMemoryOTPStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ScriptedGenerator:
    """Hands out the given codes in order."""

    def __init__(self, *codes: str) -> None:
        self._codes = list(codes)

    def generate(self) -> str:
        return self._codes.pop(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, clock, tmp_path):
    """Yield each store backend; the SQL one over a fresh SQLite file."""
    if request.param == "memory":
        yield InMemoryOTPStore(clock=clock)
        return

    engine = make_engine(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'otp.db'}"))
    await init_db(engine)

    yield SqlOTPStore(make_session_factory(engine), clock=clock)

    await engine.dispose()
