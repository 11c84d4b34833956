"""作品集模块 - 路由

注意：/me/details 必须声明在 /{username} 之前
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from devfolio.modules.auth.dependencies import CurrentUser
from devfolio.modules.project.schemas import FeaturedToggleResponse
from devfolio.modules.user.schemas import USERNAME_PATTERN
from devfolio.schemas.response import ApiResponse
from .dependencies import PortfolioServiceDep
from .schemas import OwnPortfolio, PortfolioUpdate, PortfolioUpdated, PublicPortfolio

router = APIRouter()

Username = Annotated[str, Path(min_length=1, max_length=50, pattern=USERNAME_PATTERN)]


@router.get("/me/details", response_model=ApiResponse[OwnPortfolio])
async def get_my_portfolio(
    caller: CurrentUser, service: PortfolioServiceDep
) -> ApiResponse[OwnPortfolio]:
    """本人作品集（含全部项目）"""
    return ApiResponse(data=await service.get_own(caller.user_id))


@router.put("", response_model=ApiResponse[PortfolioUpdated])
async def update_portfolio(
    data: PortfolioUpdate,
    caller: CurrentUser,
    service: PortfolioServiceDep,
) -> ApiResponse[PortfolioUpdated]:
    portfolio = await service.update(caller.user_id, data)
    return ApiResponse(message="Portfolio updated successfully", data=portfolio)


@router.post("/featured/{project_id}", response_model=ApiResponse[FeaturedToggleResponse])
async def toggle_featured(
    project_id: UUID,
    caller: CurrentUser,
    service: PortfolioServiceDep,
) -> ApiResponse[FeaturedToggleResponse]:
    """切换项目精选状态"""
    result = await service.toggle_featured(caller.user_id, project_id)
    action = "featured" if result.is_featured else "unfeatured"
    return ApiResponse(message=f"Project {action} successfully", data=result)


@router.get("/{username}", response_model=ApiResponse[PublicPortfolio])
async def get_portfolio(
    username: Username, service: PortfolioServiceDep
) -> ApiResponse[PublicPortfolio]:
    """公开作品集"""
    return ApiResponse(data=await service.get_public(username))
