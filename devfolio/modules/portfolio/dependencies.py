"""作品集模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from devfolio.dependencies import DBSession
from devfolio.modules.project.dependencies import get_project_repository
from devfolio.modules.project.repository import ProjectRepository
from devfolio.modules.user.dependencies import get_user_repository
from devfolio.modules.user.repository import UserRepository
from .repository import PortfolioRepository
from .service import PortfolioService


def get_portfolio_repository(db: DBSession) -> PortfolioRepository:
    return PortfolioRepository(db)


def get_portfolio_service(
    repository: Annotated[PortfolioRepository, Depends(get_portfolio_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    project_repo: Annotated[ProjectRepository, Depends(get_project_repository)],
) -> PortfolioService:
    return PortfolioService(repository, user_repo, project_repo)


PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]
