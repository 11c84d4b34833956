"""项目模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from devfolio.dependencies import DBSession
from .repository import ProjectRepository
from .service import ProjectService


def get_project_repository(db: DBSession) -> ProjectRepository:
    return ProjectRepository(db)


def get_project_service(
    repository: Annotated[ProjectRepository, Depends(get_project_repository)],
) -> ProjectService:
    return ProjectService(repository)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
