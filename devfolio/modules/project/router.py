"""项目模块 - 路由"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from devfolio.modules.auth.dependencies import CurrentUser, OptionalUser
from devfolio.modules.user.schemas import USERNAME_PATTERN
from devfolio.schemas.response import ApiPagedResponse, ApiResponse, Pagination
from .dependencies import ProjectServiceDep
from .schemas import (
    ProjectCreate,
    ProjectResponse,
    ProjectSort,
    ProjectSummary,
    ProjectUpdate,
    ProjectWithAuthor,
)

router = APIRouter()

Username = Annotated[str, Path(min_length=1, max_length=50, pattern=USERNAME_PATTERN)]


@router.get("", response_model=ApiPagedResponse[list[ProjectWithAuthor]])
async def list_projects(
    service: ProjectServiceDep,
    viewer: OptionalUser,
    username: str | None = Query(default=None, max_length=50),
    search: str | None = Query(default=None, max_length=100),
    sort: ProjectSort = Query(default="recent"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ApiPagedResponse[list[ProjectWithAuthor]]:
    """项目流"""
    projects = await service.feed(
        username=username, search=search, sort=sort, limit=limit, offset=offset
    )
    return ApiPagedResponse(
        data=projects,
        pagination=Pagination(limit=limit, offset=offset, count=len(projects)),
    )


@router.get("/user/{username}", response_model=ApiResponse[list[ProjectSummary]])
async def list_user_projects(
    username: Username, service: ProjectServiceDep
) -> ApiResponse[list[ProjectSummary]]:
    """某个用户的全部项目"""
    return ApiResponse(data=await service.list_for_username(username))


@router.get("/{project_id}", response_model=ApiResponse[ProjectWithAuthor])
async def get_project(
    project_id: UUID, service: ProjectServiceDep
) -> ApiResponse[ProjectWithAuthor]:
    return ApiResponse(data=await service.get(project_id))


@router.post(
    "",
    response_model=ApiResponse[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    data: ProjectCreate,
    caller: CurrentUser,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectResponse]:
    project = await service.create(caller.user_id, data)
    return ApiResponse(message="Project created successfully", data=project)


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: UUID,
    changes: ProjectUpdate,
    caller: CurrentUser,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectResponse]:
    """部分更新项目（仅所有者）"""
    project = await service.update(project_id, caller.user_id, changes)
    return ApiResponse(message="Project updated successfully", data=project)


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(
    project_id: UUID,
    caller: CurrentUser,
    service: ProjectServiceDep,
) -> ApiResponse[None]:
    await service.delete(project_id, caller.user_id)
    return ApiResponse(message="Project deleted successfully")
