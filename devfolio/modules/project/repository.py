"""项目模块 - 数据访问层"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, guarded
from devfolio.core.partial_update import build_partial_update
from devfolio.modules.user.models import User

from .models import Project
from .schemas import ProjectSort, ProjectUpdate

# 项目更新允许的字段（SET 子句按此顺序生成）
PROJECT_FIELDS = (
    "title",
    "description",
    "image_url",
    "demo_url",
    "github_url",
    "is_featured",
)


class ProjectRepository:
    """
    项目数据访问层

    注意：事务由 get_db() 依赖自动管理，Repository 只用 flush/refresh
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ============================================================
    # 查询方法
    # ============================================================

    async def get_by_id(self, project_id: UUID) -> Project | None:
        return await self.db.get(Project, project_id, populate_existing=True)

    async def get_with_author(self, project_id: UUID) -> tuple[Project, User] | None:
        stmt = (
            select(Project, User)
            .join(User, Project.user_id == User.id)
            .where(Project.id == project_id)
        )
        row = (await self.db.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def feed(
        self,
        *,
        username: str | None = None,
        search: str | None = None,
        sort: ProjectSort = "recent",
        limit: int = 20,
        offset: int = 0,
    ) -> list[tuple[Project, User]]:
        """项目流：可按作者用户名过滤，按标题 / 描述模糊搜索"""
        stmt = select(Project, User).join(User, Project.user_id == User.id)
        if username:
            stmt = stmt.where(User.username == username)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(Project.title.ilike(pattern), Project.description.ilike(pattern))
            )
        if sort == "recent":
            stmt = stmt.order_by(Project.created_at.desc())
        stmt = stmt.limit(limit).offset(offset)
        result = await self.db.execute(stmt)
        return [(project, user) for project, user in result.all()]

    async def list_by_username(self, username: str) -> list[Project]:
        stmt = (
            select(Project)
            .join(User, Project.user_id == User.id)
            .where(User.username == username)
            .order_by(Project.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(
        self, user_id: UUID, *, featured_only: bool = False
    ) -> list[Project]:
        stmt = select(Project).where(Project.user_id == user_id)
        if featured_only:
            stmt = stmt.where(Project.is_featured.is_(True))
        result = await self.db.execute(stmt.order_by(Project.created_at.desc()))
        return list(result.scalars().all())

    async def get_owned(self, project_id: UUID, user_id: UUID) -> Project | None:
        """只返回属于 user_id 的项目（不区分“不存在”和“不是你的”）"""
        stmt = select(Project).where(Project.id == project_id, Project.user_id == user_id)
        return await self.db.scalar(stmt)

    # ============================================================
    # 写操作
    # ============================================================

    async def create(self, project: Project) -> Ok[Project] | Conflict | StoreFailure:
        async def _create() -> Project:
            self.db.add(project)
            await self.db.flush()
            await self.db.refresh(project)
            return project

        return await guarded(_create())

    async def update(
        self, project_id: UUID, changes: ProjectUpdate
    ) -> Ok[Project] | NotFound | Conflict | StoreFailure:
        """按请求中出现的字段部分更新"""
        stmt = build_partial_update(
            Project, PROJECT_FIELDS, changes, Project.id == project_id
        )

        async def _update() -> Project | None:
            if stmt is not None:
                await self.db.execute(stmt)
            return await self.get_by_id(project_id)

        match await guarded(_update()):
            case Ok(value=None):
                return NotFound()
            case outcome:
                return outcome

    async def delete(self, project_id: UUID) -> Ok[None] | Conflict | StoreFailure:
        async def _delete() -> None:
            await self.db.execute(
                delete(Project)
                .where(Project.id == project_id)
                .execution_options(synchronize_session=False)
            )

        return await guarded(_delete())

    async def set_featured(
        self, project_id: UUID, is_featured: bool
    ) -> Ok[None] | Conflict | StoreFailure:
        async def _set() -> None:
            await self.db.execute(
                update(Project)
                .where(Project.id == project_id)
                .values(is_featured=is_featured)
                .execution_options(synchronize_session=False)
            )

        return await guarded(_set())

    async def replace_featured(
        self, user_id: UUID, project_ids: Sequence[UUID]
    ) -> Ok[None] | Conflict | StoreFailure:
        """整组替换精选项目：先全部取消，再只标记属于该用户的给定项目

        不属于该用户的 id 被 WHERE 条件静默忽略。
        """

        async def _replace() -> None:
            await self.db.execute(
                update(Project)
                .where(Project.user_id == user_id)
                .values(is_featured=False)
                .execution_options(synchronize_session=False)
            )
            if project_ids:
                await self.db.execute(
                    update(Project)
                    .where(Project.user_id == user_id, Project.id.in_(project_ids))
                    .values(is_featured=True)
                    .execution_options(synchronize_session=False)
                )

        return await guarded(_replace())
