from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables)
from app.auth.roles import SessionContext
from app.models.base import Base
from app.models.profile import Profile, UserRole
from app.models.shift import Shift, ShiftStatus
from app.utils.timezones import local_today


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def make_profile(db, uid: str, name: str, role: UserRole = UserRole.employee, active: bool = True) -> Profile:
    profile = Profile(
        uid=uid,
        email=f"{uid}@example.com",
        display_name=name,
        role=role,
        is_active=active,
    )
    db.add(profile)
    await db.commit()
    return profile


@pytest.fixture
async def admin(db) -> SessionContext:
    return SessionContext.from_profile(await make_profile(db, "boss", "Šéf", UserRole.admin))


@pytest.fixture
async def alice(db) -> SessionContext:
    return SessionContext.from_profile(await make_profile(db, "alice", "Alice Nováková"))


@pytest.fixture
async def bob(db) -> SessionContext:
    return SessionContext.from_profile(await make_profile(db, "bob", "Bob Dvořák"))


@pytest.fixture
def upcoming():
    """A date a few days ahead, so shifts on it are never 'in the past'."""
    return local_today() + timedelta(days=3)


async def make_shift(db, day, created_by="boss", **kwargs) -> Shift:
    shift = Shift(
        date=day,
        start_time=kwargs.pop("start_time", "09:00"),
        end_time=kwargs.pop("end_time", "17:00"),
        position=kwargs.pop("position", "Číšník"),
        notes=kwargs.pop("notes", ""),
        status=kwargs.pop("status", ShiftStatus.open),
        created_by=created_by,
        **kwargs,
    )
    db.add(shift)
    await db.commit()
    await db.refresh(shift)
    return shift


# ---------- HTTP client with the caller swapped in ----------
class Caller:
    def __init__(self):
        self.ctx = None


@pytest.fixture
async def client(session_factory):
    from app.main import app
    from app.db import get_db
    from app.auth.dependencies import get_session_context

    caller = Caller()

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_ctx():
        return caller.ctx

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_context] = _get_ctx

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        ac.caller = caller
        yield ac

    app.dependency_overrides.clear()
