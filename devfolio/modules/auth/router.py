"""认证模块 - 路由"""

from fastapi import APIRouter, status

from devfolio.modules.user.dependencies import UserServiceDep
from devfolio.modules.user.schemas import UserProfile
from devfolio.schemas.response import ApiResponse
from .dependencies import AuthServiceDep, CurrentUser
from .schemas import AuthPayload, ChangePasswordRequest, LoginRequest, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
)
async def register(data: RegisterRequest, service: AuthServiceDep) -> ApiResponse[AuthPayload]:
    """注册新用户"""
    payload = await service.register(data)
    return ApiResponse(message="User registered successfully", data=payload)


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(data: LoginRequest, service: AuthServiceDep) -> ApiResponse[AuthPayload]:
    """登录并获取 access token"""
    payload = await service.authenticate(data)
    return ApiResponse(message="Login successful", data=payload)


@router.get("/me", response_model=ApiResponse[UserProfile])
async def me(caller: CurrentUser, service: UserServiceDep) -> ApiResponse[UserProfile]:
    """当前登录用户"""
    profile = await service.get_profile(caller.user_id)
    return ApiResponse(data=profile)


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    data: ChangePasswordRequest,
    caller: CurrentUser,
    service: AuthServiceDep,
) -> ApiResponse[None]:
    """修改密码"""
    await service.change_password(caller.user_id, data)
    return ApiResponse(message="Password changed successfully")
