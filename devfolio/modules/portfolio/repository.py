"""作品集模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, guarded
from devfolio.core.partial_update import build_partial_update
from devfolio.modules.user.models import User

from .models import Portfolio
from .schemas import PortfolioUpdate

# 作品集文本字段（SET 子句按此顺序生成）
PORTFOLIO_FIELDS = ("summary", "experience", "education")


class PortfolioRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_user_id(self, user_id: UUID) -> Portfolio | None:
        stmt = (
            select(Portfolio)
            .where(Portfolio.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return await self.db.scalar(stmt)

    async def get_with_owner(
        self,
        *,
        user_id: UUID | None = None,
        username: str | None = None,
    ) -> tuple[Portfolio, User] | None:
        """按 user_id 或用户名查询作品集及其所有者"""
        stmt = select(Portfolio, User).join(User, Portfolio.user_id == User.id)
        if user_id is not None:
            stmt = stmt.where(User.id == user_id)
        if username is not None:
            stmt = stmt.where(User.username == username)
        row = (await self.db.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def update_fields(
        self, user_id: UUID, changes: PortfolioUpdate
    ) -> Ok[Portfolio] | NotFound | Conflict | StoreFailure:
        """部分更新文本字段，返回更新后的作品集"""
        stmt = build_partial_update(
            Portfolio, PORTFOLIO_FIELDS, changes, Portfolio.user_id == user_id
        )

        async def _update() -> Portfolio | None:
            if stmt is not None:
                await self.db.execute(stmt)
            return await self.get_by_user_id(user_id)

        match await guarded(_update()):
            case Ok(value=None):
                return NotFound()
            case outcome:
                return outcome
