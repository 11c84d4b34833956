"""项目模块 - 业务逻辑层"""

from typing import assert_never
from uuid import UUID

from loguru import logger

from devfolio.core.exceptions import NoFieldsToUpdateError, TransactionFailedError
from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, cause_of

from .exceptions import NotProjectOwnerError, ProjectNotFoundError
from .models import Project
from .repository import ProjectRepository
from .schemas import (
    Author,
    ProjectCreate,
    ProjectResponse,
    ProjectSort,
    ProjectSummary,
    ProjectUpdate,
    ProjectWithAuthor,
)


def _with_author(project: Project, author: Author) -> ProjectWithAuthor:
    return ProjectWithAuthor(
        **ProjectSummary.model_validate(project).model_dump(),
        author=author,
    )


class ProjectService:
    def __init__(self, repository: ProjectRepository) -> None:
        self.repository = repository

    async def feed(
        self,
        *,
        username: str | None = None,
        search: str | None = None,
        sort: ProjectSort = "recent",
        limit: int = 20,
        offset: int = 0,
    ) -> list[ProjectWithAuthor]:
        """项目流（作者信息不含简介）"""
        rows = await self.repository.feed(
            username=username, search=search, sort=sort, limit=limit, offset=offset
        )
        return [
            _with_author(
                project,
                Author(
                    id=user.id,
                    name=user.name,
                    username=user.username,
                    avatar_url=user.avatar_url,
                ),
            )
            for project, user in rows
        ]

    async def get(self, project_id: UUID) -> ProjectWithAuthor:
        """单个项目（作者信息含简介）"""
        row = await self.repository.get_with_author(project_id)
        if not row:
            raise ProjectNotFoundError()
        project, user = row
        return _with_author(project, Author.model_validate(user))

    async def list_for_username(self, username: str) -> list[ProjectSummary]:
        """某个用户的全部项目（用户不存在时为空列表）"""
        projects = await self.repository.list_by_username(username)
        return [ProjectSummary.model_validate(p) for p in projects]

    async def create(self, owner_id: UUID, data: ProjectCreate) -> ProjectResponse:
        project = Project(user_id=owner_id, **data.model_dump())
        match await self.repository.create(project):
            case Ok(value=created):
                logger.info("Project created: {} by {}", created.id, owner_id)
                return ProjectResponse.model_validate(created)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error creating project") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)

    async def _require_owned(self, project_id: UUID, caller_id: UUID, action: str) -> Project:
        """先判断存在（404），再判断所有权（403）"""
        project = await self.repository.get_by_id(project_id)
        if not project:
            raise ProjectNotFoundError()
        if project.user_id != caller_id:
            raise NotProjectOwnerError(action)
        return project

    async def update(
        self, project_id: UUID, caller_id: UUID, changes: ProjectUpdate
    ) -> ProjectResponse:
        """部分更新，仅所有者可操作"""
        await self._require_owned(project_id, caller_id, "update")
        if not changes.model_fields_set:
            raise NoFieldsToUpdateError()

        match await self.repository.update(project_id, changes):
            case Ok(value=project):
                return ProjectResponse.model_validate(project)
            case NotFound():
                raise ProjectNotFoundError()
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error updating project") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)

    async def delete(self, project_id: UUID, caller_id: UUID) -> None:
        await self._require_owned(project_id, caller_id, "delete")
        match await self.repository.delete(project_id):
            case Ok():
                logger.info("Project deleted: {}", project_id)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error deleting project") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)
