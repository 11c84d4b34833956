"""作品集模块 - 业务逻辑层"""

from typing import assert_never
from uuid import UUID

from loguru import logger

from devfolio.core.exceptions import TransactionFailedError
from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, cause_of
from devfolio.modules.project.exceptions import ProjectNotFoundError
from devfolio.modules.project.repository import ProjectRepository
from devfolio.modules.project.schemas import FeaturedToggleResponse
from devfolio.modules.user.models import User
from devfolio.modules.user.repository import UserRepository
from devfolio.modules.user.schemas import Socials
from devfolio.modules.user.service import normalize_skills

from .exceptions import PortfolioNotFoundError
from .models import Portfolio
from .repository import PortfolioRepository
from .schemas import (
    FeaturedProject,
    OwnPortfolio,
    PortfolioOwner,
    PortfolioProject,
    PortfolioUpdate,
    PortfolioUpdated,
    PublicPortfolio,
)


class PortfolioService:
    def __init__(
        self,
        repository: PortfolioRepository,
        user_repo: UserRepository,
        project_repo: ProjectRepository,
    ) -> None:
        self.repository = repository
        self.user_repo = user_repo
        self.project_repo = project_repo

    async def _view_fields(self, portfolio: Portfolio, owner: User) -> dict:
        """两种作品集视图共用的字段"""
        return {
            "id": portfolio.id,
            "summary": portfolio.summary,
            "experience": portfolio.experience,
            "education": portfolio.education,
            "skills": await self.user_repo.get_skills(owner.id),
            "socials": Socials(**await self.user_repo.get_socials(owner.id)),
            "user": PortfolioOwner.model_validate(owner),
            "created_at": portfolio.created_at,
            "updated_at": portfolio.updated_at,
        }

    async def get_public(self, username: str) -> PublicPortfolio:
        row = await self.repository.get_with_owner(username=username)
        if not row:
            raise PortfolioNotFoundError()
        portfolio, owner = row
        featured = await self.project_repo.list_by_user(owner.id, featured_only=True)
        return PublicPortfolio(
            **await self._view_fields(portfolio, owner),
            featured_projects=[FeaturedProject.model_validate(p) for p in featured],
        )

    async def get_own(self, user_id: UUID) -> OwnPortfolio:
        row = await self.repository.get_with_owner(user_id=user_id)
        if not row:
            raise PortfolioNotFoundError()
        portfolio, owner = row
        projects = await self.project_repo.list_by_user(owner.id)
        return OwnPortfolio(
            **await self._view_fields(portfolio, owner),
            projects=[PortfolioProject.model_validate(p) for p in projects],
        )

    async def update(self, user_id: UUID, data: PortfolioUpdate) -> PortfolioUpdated:
        """
        在同一个请求事务内依次执行：
        1. 部分更新文本字段
        2. skills 出现时整组替换
        3. featured_projects 出现时整组替换

        任何一步失败都抛出 TransactionFailedError，由 get_db() 回滚整个事务。
        """
        match await self.repository.update_fields(user_id, data):
            case Ok(value=portfolio):
                pass
            case NotFound():
                raise PortfolioNotFoundError()
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error updating portfolio") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)

        if data.skills is not None:
            match await self.user_repo.replace_skills(user_id, normalize_skills(data.skills)):
                case Ok():
                    pass
                case Conflict() | StoreFailure() as failure:
                    raise TransactionFailedError("Error updating portfolio") from cause_of(
                        failure
                    )
                case unreachable:
                    assert_never(unreachable)

        if data.featured_projects is not None:
            match await self.project_repo.replace_featured(user_id, data.featured_projects):
                case Ok():
                    pass
                case Conflict() | StoreFailure() as failure:
                    raise TransactionFailedError("Error updating portfolio") from cause_of(
                        failure
                    )
                case unreachable:
                    assert_never(unreachable)

        logger.info("Portfolio updated for {}", user_id)
        return PortfolioUpdated(
            id=portfolio.id,
            summary=portfolio.summary,
            experience=portfolio.experience,
            education=portfolio.education,
            skills=await self.user_repo.get_skills(user_id),
            updated_at=portfolio.updated_at,
        )

    async def toggle_featured(self, user_id: UUID, project_id: UUID) -> FeaturedToggleResponse:
        """切换精选状态；项目不存在与不属于自己统一返回 404"""
        project = await self.project_repo.get_owned(project_id, user_id)
        if not project:
            raise ProjectNotFoundError("Project not found or does not belong to you")

        is_featured = not project.is_featured
        match await self.project_repo.set_featured(project_id, is_featured):
            case Ok():
                return FeaturedToggleResponse(project_id=project_id, is_featured=is_featured)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error updating featured status") from cause_of(
                    failure
                )
            case unreachable:
                assert_never(unreachable)
