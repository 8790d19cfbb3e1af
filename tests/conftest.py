import time
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from habitpal.database import get_db
from habitpal.dependencies import get_current_user
from habitpal.main import app
from habitpal.models import Base
from habitpal.models.user import User
from habitpal.services.auth_service import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeRedis:
    """In-memory Redis mock for testing."""

    def __init__(self):
        self._store: dict[str, str] = {}
        self._expires: dict[str, float] = {}

    async def get(self, key: str) -> str | None:
        expires = self._expires.get(key)
        if expires is not None and expires <= time.time():
            self._store.pop(key, None)
            self._expires.pop(key, None)
        return self._store.get(key)

    async def setex(self, key: str, seconds: int, value: str) -> None:
        self._store[key] = str(value)
        self._expires[key] = time.time() + seconds

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        pass


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


async def _make_user(db_session: AsyncSession, username: str) -> User:
    user = User(username=username, password=hash_password("password123"))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "alice")


@pytest.fixture
async def second_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "bob")


@pytest.fixture
async def third_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "carol")


def _override_get_db(db_engine):
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db


@pytest.fixture
async def client(db_engine, test_user: User) -> AsyncGenerator[AsyncClient, None]:
    """Client already signed in as test_user."""

    async def override_get_current_user():
        return test_user

    app.dependency_overrides[get_db] = _override_get_db(db_engine)
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.state.redis = FakeRedis()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Client going through real cookie authentication."""
    app.dependency_overrides[get_db] = _override_get_db(db_engine)
    app.state.redis = FakeRedis()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def act_as():
    """Switch the signed-in user of the `client` fixture."""

    def _act_as(user: User) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _act_as
