"""Service test fixtures — async DB, services, seeded users/todos, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - app.state gets the token service, hasher, and a db_manager bound to the test engine
    - Seed data: two users (only the first holds an active token) and one todo each

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (FOR UPDATE is a no-op on SQLite; row locking is exercised on PostgreSQL only)
    - bcrypt at 4 rounds: same code path, fraction of the cost
"""

from dataclasses import dataclass

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from todo_api.config import get_settings
from todo_api.core.domain_types import TokenAccess
from todo_api.db.base import Base
from todo_api.infrastructure.database import get_db, DatabaseSessionManager
from todo_api.infrastructure.password_hasher import PasswordHasher
from todo_api.infrastructure.token_service import TokenService
from todo_api.models.todo import Todo
from todo_api.models.user import User
from todo_api.models.user_token import UserToken
from todo_api.services.credential_store import CredentialStore
from todo_api.services.todo_ownership import TodoOwnershipEngine
from todo_api.main import app


class FakeClock:
    """Settable epoch-millis clock."""

    def __init__(self, now: int = 1_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


@dataclass
class Seed:
    user_one: User
    user_two: User
    user_one_token: str
    todos: list[Todo]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService(settings.jwt_secret, settings.jwt_algorithm)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def store(test_db, hasher, token_service) -> CredentialStore:
    return CredentialStore(test_db, hasher, token_service)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def todo_engine(test_db, clock) -> TodoOwnershipEngine:
    return TodoOwnershipEngine(test_db, clock=clock)


@pytest.fixture
async def seed(test_session_factory, hasher, token_service) -> Seed:
    """Two users and two todos; user one holds an active auth token."""
    async with test_session_factory() as db:
        user_one = User(
            email="mike@example.com",
            password_hash=hasher.hash("userOnePass"),
            tokens=[],
        )
        user_two = User(
            email="jenn@example.com",
            password_hash=hasher.hash("userTwoPass"),
            tokens=[],
        )
        db.add_all([user_one, user_two])
        await db.flush()

        token = token_service.issue(user_one.id, TokenAccess.AUTH.value)
        user_one.tokens.append(
            UserToken(access=TokenAccess.AUTH.value, token=token),
        )

        todos = [
            Todo(owner_id=user_one.id, text="First test todo"),
            Todo(
                owner_id=user_two.id, text="Second test todo",
                completed=True, completed_at=333,
            ),
        ]
        db.add_all(todos)
        await db.commit()

    return Seed(
        user_one=user_one, user_two=user_two,
        user_one_token=token, todos=todos,
    )


@pytest.fixture
def auth_headers(seed, settings) -> dict:
    return {settings.auth_header: seed.user_one_token}


@pytest.fixture
async def client(test_engine, test_session_factory, token_service, hasher):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager
    app.state.token_service = token_service
    app.state.password_hasher = hasher

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
