import os

# 必须在导入 devfolio 之前设置（Settings 在导入时加载）
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdefghijklmnop"
os.environ["DB_PASSWORD"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import devfolio.models  # noqa: F401
from devfolio.core.database import Base, get_db
from devfolio.main import create_app

PASSWORD = "secret123"


@dataclass(frozen=True)
class Account:
    """测试中注册的用户"""

    id: UUID
    username: str
    email: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """每个测试一个全新的内存 SQLite 数据库"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def count_rows(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[int]]:
    """统计某张表（可带条件）的行数"""

    async def _count(model, *where) -> int:
        async with session_factory() as session:
            stmt = select(func.count()).select_from(model)
            if where:
                stmt = stmt.where(*where)
            return await session.scalar(stmt)

    return _count


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[Account]]:
    """注册用户并返回 Account"""

    async def _register(username: str = "alice", **overrides) -> Account:
        payload = {
            "name": username.title(),
            "username": username,
            "email": f"{username}@devfolio.dev",
            "password": PASSWORD,
        } | overrides
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return Account(
            id=UUID(data["user"]["id"]),
            username=data["user"]["username"],
            email=data["user"]["email"],
            token=data["token"],
        )

    return _register


@pytest.fixture
async def alice(register) -> Account:
    return await register("alice")


@pytest.fixture
async def bob(register) -> Account:
    return await register("bob")
