"""用户模块 - 路由"""

from typing import Annotated

from fastapi import APIRouter, Path, Query

from devfolio.modules.auth.dependencies import CurrentUser, OptionalUser
from devfolio.schemas.response import ApiPagedResponse, ApiResponse, PaginationTotal
from .dependencies import UserServiceDep
from .schemas import (
    USERNAME_PATTERN,
    ProfileResponse,
    ProfileUpdate,
    PublicProfile,
    Socials,
    SocialsUpdate,
    SkillsResponse,
    SkillsUpdate,
    UserListItem,
)

router = APIRouter()

Username = Annotated[str, Path(min_length=1, max_length=50, pattern=USERNAME_PATTERN)]


@router.get("", response_model=ApiPagedResponse[list[UserListItem]])
async def list_users(
    service: UserServiceDep,
    viewer: OptionalUser,
    search: str | None = Query(default=None, max_length=100),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ApiPagedResponse[list[UserListItem]]:
    """用户发现 / 搜索"""
    users = await service.search(search=search, limit=limit, offset=offset)
    return ApiPagedResponse(
        data=users,
        pagination=PaginationTotal(limit=limit, offset=offset, total=len(users)),
    )


@router.put("/profile", response_model=ApiResponse[ProfileResponse])
async def update_profile(
    changes: ProfileUpdate,
    caller: CurrentUser,
    service: UserServiceDep,
) -> ApiResponse[ProfileResponse]:
    """更新个人资料（部分更新）"""
    profile = await service.update_profile(caller.user_id, changes)
    return ApiResponse(message="Profile updated successfully", data=profile)


@router.put("/skills", response_model=ApiResponse[SkillsResponse])
async def update_skills(
    payload: SkillsUpdate,
    caller: CurrentUser,
    service: UserServiceDep,
) -> ApiResponse[SkillsResponse]:
    """整组替换技能"""
    skills = await service.replace_skills(caller.user_id, payload.skills)
    return ApiResponse(
        message="Skills updated successfully", data=SkillsResponse(skills=skills)
    )


@router.put("/socials", response_model=ApiResponse[Socials])
async def update_socials(
    payload: SocialsUpdate,
    caller: CurrentUser,
    service: UserServiceDep,
) -> ApiResponse[Socials]:
    """整组替换社交链接"""
    socials = await service.replace_socials(caller.user_id, payload)
    return ApiResponse(message="Social links updated successfully", data=socials)


@router.delete("/account", response_model=ApiResponse[None])
async def delete_account(caller: CurrentUser, service: UserServiceDep) -> ApiResponse[None]:
    """删除账号"""
    await service.delete_account(caller.user_id)
    return ApiResponse(message="Account deleted successfully")


@router.get("/{username}", response_model=ApiResponse[PublicProfile])
async def get_user(username: Username, service: UserServiceDep) -> ApiResponse[PublicProfile]:
    """按用户名获取公开资料"""
    profile = await service.get_public_profile(username)
    return ApiResponse(data=profile)
