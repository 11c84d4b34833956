"""认证模块 - 依赖注入

每个请求的认证状态：
    无 token → (提取 Bearer) → 有 token → (校验) → 已认证(user_id) | 拒绝

- 受保护路由：缺少 token 返回 401
- 可选认证路由：缺少 token 时匿名继续
- token 存在但无效：无论哪种路由都返回 401

校验通过后只解析出 user_id，不再查询用户是否存在；
用户已被删除的情况由后续查库的处理函数自行返回 404。
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import UnauthorizedError
from devfolio.core.security import TokenExpired, TokenError, decode_access_token
from devfolio.modules.user.dependencies import get_user_repository
from devfolio.modules.user.repository import UserRepository
from .service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[
    HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
]


@dataclass(frozen=True, slots=True)
class AuthContext:
    """已认证调用者（不可变，显式传给处理函数）"""

    user_id: UUID


def _authenticate(credentials: HTTPAuthorizationCredentials) -> AuthContext:
    try:
        user_id = decode_access_token(credentials.credentials)
    except TokenExpired as exc:
        raise UnauthorizedError("Token expired", code=ErrorCode.TOKEN_EXPIRED) from exc
    except TokenError as exc:
        raise UnauthorizedError("Invalid token", code=ErrorCode.INVALID_TOKEN) from exc
    return AuthContext(user_id=user_id)


def require_auth(credentials: BearerCredentials) -> AuthContext:
    """受保护路由：必须携带有效 token"""
    if credentials is None:
        raise UnauthorizedError("No token provided")
    return _authenticate(credentials)


def optional_auth(credentials: BearerCredentials) -> AuthContext | None:
    """可选认证路由：未携带 token 时返回 None，携带无效 token 仍然拒绝"""
    if credentials is None:
        return None
    return _authenticate(credentials)


CurrentUser = Annotated[AuthContext, Depends(require_auth)]
OptionalUser = Annotated[AuthContext | None, Depends(optional_auth)]


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthService:
    return AuthService(user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
