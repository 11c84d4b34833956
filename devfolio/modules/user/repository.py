"""用户模块 - 数据访问层"""

from collections.abc import Mapping, Sequence
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, guarded
from devfolio.core.partial_update import build_partial_update
from devfolio.modules.portfolio.models import Portfolio
from devfolio.modules.project.models import Project

from .models import SOCIAL_PLATFORMS, SocialLink, User, UserSkill
from .schemas import ProfileUpdate

# 资料更新允许的字段（SET 子句按此顺序生成）
PROFILE_FIELDS = ("name", "bio", "avatar_url", "cover_image_url", "email")


class UserRepository:
    """
    用户数据访问层

    注意：
    - 事务由 get_db() 依赖自动管理，Repository 只用 flush/refresh
    - 写操作返回 Ok / NotFound / Conflict / StoreFailure，由 Service 层逐一处理
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ============================================================
    # 查询方法
    # ============================================================

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id, populate_existing=True)

    async def get_by_email(self, email: str) -> User | None:
        return await self.db.scalar(select(User).where(User.email == email))

    async def get_by_username(self, username: str) -> User | None:
        return await self.db.scalar(select(User).where(User.username == username))

    async def exists_by_email_or_username(self, email: str, username: str) -> bool:
        stmt = select(User.id).where(
            or_(User.email == email, User.username == username)
        )
        return await self.db.scalar(stmt.limit(1)) is not None

    async def get_skills(self, user_id: UUID) -> list[str]:
        skills = await self.get_skills_for([user_id])
        return skills.get(user_id, [])

    async def get_skills_for(self, user_ids: Sequence[UUID]) -> dict[UUID, list[str]]:
        """批量查询技能，按 user_id 分组"""
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(UserSkill.user_id, UserSkill.skill)
            .where(UserSkill.user_id.in_(user_ids))
            .order_by(UserSkill.skill)
        )
        grouped: dict[UUID, list[str]] = {}
        for user_id, skill in result.all():
            grouped.setdefault(user_id, []).append(skill)
        return grouped

    async def get_socials(self, user_id: UUID) -> dict[str, str | None]:
        """社交链接，未设置的平台为 None"""
        result = await self.db.execute(
            select(SocialLink.platform, SocialLink.url).where(
                SocialLink.user_id == user_id
            )
        )
        socials: dict[str, str | None] = dict.fromkeys(SOCIAL_PLATFORMS)
        socials.update({platform: url for platform, url in result.all()})
        return socials

    async def count_projects(self, user_id: UUID) -> int:
        stmt = select(func.count(Project.id)).where(Project.user_id == user_id)
        return await self.db.scalar(stmt) or 0

    async def search(
        self,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[tuple[User, int]]:
        """用户发现：按姓名 / 用户名 / 简介模糊匹配，返回 (用户, 项目数)，最新注册在前"""
        project_count = (
            select(func.count(Project.id))
            .where(Project.user_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        stmt = select(User, project_count)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    User.name.ilike(pattern),
                    User.username.ilike(pattern),
                    User.bio.ilike(pattern),
                )
            )
        stmt = stmt.order_by(User.created_at.desc()).limit(limit).offset(offset)
        result = await self.db.execute(stmt)
        return [(user, count) for user, count in result.all()]

    # ============================================================
    # 写操作
    # ============================================================

    async def create_with_portfolio(
        self, user: User, portfolio: Portfolio
    ) -> Ok[User] | Conflict | StoreFailure:
        """创建用户及其作品集（同一事务）"""

        async def _create() -> User:
            self.db.add(user)
            await self.db.flush()
            portfolio.user_id = user.id
            self.db.add(portfolio)
            await self.db.flush()
            await self.db.refresh(user)
            return user

        return await guarded(_create())

    async def update_profile(
        self, user_id: UUID, changes: ProfileUpdate
    ) -> Ok[User] | NotFound | Conflict | StoreFailure:
        """按请求中出现的字段部分更新资料，返回更新后的用户"""
        stmt = build_partial_update(User, PROFILE_FIELDS, changes, User.id == user_id)

        async def _update() -> User | None:
            if stmt is not None:
                await self.db.execute(stmt)
            return await self.get_by_id(user_id)

        match await guarded(_update()):
            case Ok(value=None):
                return NotFound()
            case outcome:
                return outcome

    async def update_password(
        self, user_id: UUID, hashed_password: str
    ) -> Ok[None] | StoreFailure | Conflict:
        async def _update() -> None:
            await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(hashed_password=hashed_password)
                .execution_options(synchronize_session=False)
            )

        return await guarded(_update())

    async def replace_skills(
        self, user_id: UUID, skills: Sequence[str]
    ) -> Ok[list[str]] | Conflict | StoreFailure:
        """整组替换技能：先删除全部，再插入给定集合（空列表即清空）"""

        async def _replace() -> list[str]:
            await self.db.execute(delete(UserSkill).where(UserSkill.user_id == user_id))
            if skills:
                self.db.add_all(
                    [UserSkill(user_id=user_id, skill=skill) for skill in skills]
                )
                await self.db.flush()
            return list(skills)

        return await guarded(_replace())

    async def replace_social_links(
        self, user_id: UUID, links: Mapping[str, str]
    ) -> Ok[dict[str, str]] | Conflict | StoreFailure:
        """整组替换社交链接：每个平台一行"""

        async def _replace() -> dict[str, str]:
            await self.db.execute(
                delete(SocialLink).where(SocialLink.user_id == user_id)
            )
            if links:
                self.db.add_all(
                    [
                        SocialLink(user_id=user_id, platform=platform, url=url)
                        for platform, url in links.items()
                    ]
                )
                await self.db.flush()
            return dict(links)

        return await guarded(_replace())

    async def delete(self, user_id: UUID) -> Ok[None] | NotFound | Conflict | StoreFailure:
        """删除用户（作品集、项目、技能、社交链接、私信由外键级联删除）"""

        async def _delete() -> int:
            result = await self.db.execute(
                delete(User)
                .where(User.id == user_id)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        match await guarded(_delete()):
            case Ok(value=0):
                return NotFound()
            case Ok():
                return Ok(None)
            case outcome:
                return outcome
