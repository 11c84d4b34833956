"""API 路由聚合"""

from fastapi import APIRouter

from devfolio.modules.auth.router import router as auth_router
from devfolio.modules.message.router import router as message_router
from devfolio.modules.portfolio.router import router as portfolio_router
from devfolio.modules.project.router import router as project_router
from devfolio.modules.user.router import router as user_router
from devfolio.schemas.response import ErrorResponse

# 错误信封写入 OpenAPI 文档
api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(user_router, prefix="/users", tags=["users"])
api_router.include_router(project_router, prefix="/projects", tags=["projects"])
api_router.include_router(portfolio_router, prefix="/portfolios", tags=["portfolios"])
api_router.include_router(message_router, prefix="/messages", tags=["messages"])
