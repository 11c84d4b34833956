"""数据库：引擎、会话依赖与 ORM 基类"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from uuid import UUID

from loguru import logger
from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_utils.compat import uuid7

from devfolio.config import get_settings

settings = get_settings()

# 约束 / 索引命名规则，保证生成的 DDL 名称稳定
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=settings.db.pool_size,
    max_overflow=settings.db.max_overflow,
    pool_recycle=3600,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(AsyncAttrs, DeclarativeBase):
    """所有表共用的基类：UUIDv7 主键（按时间有序），共享 MetaData 以便跨模块外键"""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid7)


class TimestampMixin:
    """created_at / updated_at（应用层写入 UTC）"""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """请求级会话：一个请求内的所有写操作属于同一事务

    处理函数正常返回时提交；抛出任何异常（包括业务异常）时回滚，
    因此多步写操作要么全部生效，要么全部不生效。
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_database() -> None:
    """启动时探测数据库；debug 模式下顺便建表（不做迁移）"""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if settings.debug:
                await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as exc:
        # 数据库暂不可用时服务仍然启动，具体请求会以 500 失败
        logger.warning("Database is not reachable at startup: {}", exc)
        return
    logger.info("Database connection established")


async def close_database() -> None:
    await engine.dispose()
