"""Shared test fixtures with in-memory SQLite."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from contentops.models.base import Base
from contentops.models.user import User, UserRole
from contentops.models.workspace import Workspace
from contentops.main import app
from contentops.dependencies import get_db
from tests.factories import auth_headers, create_user, create_workspace

# --- SQLite compatibility: compile PostgreSQL types for SQLite ---

@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_, compiler, **kw):
    return "JSON"


@compiles(UUID, "sqlite")
def _compile_uuid_sqlite(type_, compiler, **kw):
    return "VARCHAR(36)"


# In-memory SQLite shared by every session of a test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
test_session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@event.listens_for(test_engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def setup_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def client(setup_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(setup_db):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def admin_auth(db_session: AsyncSession) -> tuple[User, dict]:
    """Return (admin_user, auth_headers)."""
    user = await create_user(db_session, UserRole.ADMIN)
    return user, auth_headers(user)


@pytest.fixture
async def editor_auth(db_session: AsyncSession) -> tuple[User, dict]:
    user = await create_user(db_session, UserRole.EDITOR)
    return user, auth_headers(user)


@pytest.fixture
async def writer_auth(db_session: AsyncSession) -> tuple[User, dict]:
    user = await create_user(db_session, UserRole.WRITER)
    return user, auth_headers(user)


@pytest.fixture
async def workspace(db_session: AsyncSession, admin_auth) -> Workspace:
    """A workspace owned by the admin user."""
    admin_user, _ = admin_auth
    return await create_workspace(db_session, admin_user)
