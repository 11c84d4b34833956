"""存储写操作结果类型

Repository 的写操作不抛出 SQLAlchemy 异常，而是返回以下四种结果之一，
Service 层用 match 逐一处理：

    match await repo.create(...):
        case Ok(value=user): ...
        case NotFound(): ...
        case Conflict(): ...
        case StoreFailure(error=err): ...
"""

from collections.abc import Awaitable
from dataclasses import dataclass

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    pass


@dataclass(frozen=True, slots=True)
class Conflict:
    """唯一约束冲突"""

    detail: str | None = None


@dataclass(frozen=True, slots=True)
class StoreFailure:
    error: Exception


type Outcome[T] = Ok[T] | NotFound | Conflict | StoreFailure


async def guarded[T](operation: Awaitable[T]) -> Ok[T] | Conflict | StoreFailure:
    """执行一次存储操作，把数据库异常转换为结果值"""
    try:
        return Ok(await operation)
    except IntegrityError as exc:
        logger.info("Unique constraint violated: {}", exc.orig)
        return Conflict(str(exc.orig))
    except SQLAlchemyError as exc:
        logger.opt(exception=exc).error("Store operation failed")
        return StoreFailure(exc)


def cause_of(failure: Conflict | StoreFailure) -> Exception | None:
    """用于 raise ... from，保留底层数据库异常"""
    return failure.error if isinstance(failure, StoreFailure) else None
