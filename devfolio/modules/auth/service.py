"""认证模块 - 业务逻辑层"""

from typing import assert_never
from uuid import UUID

from loguru import logger
from starlette.concurrency import run_in_threadpool

from devfolio.core.exceptions import InvalidCredentialsError, TransactionFailedError
from devfolio.core.outcome import Conflict, Ok, StoreFailure, cause_of
from devfolio.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    hash_password,
    verify_password,
)
from devfolio.modules.portfolio.models import Portfolio
from devfolio.modules.user.exceptions import DuplicateUserError, UserNotFoundError
from devfolio.modules.user.models import User
from devfolio.modules.user.repository import UserRepository
from devfolio.modules.user.schemas import UserBrief

from .exceptions import PasswordsRequiredError, PasswordTooShortError, WrongPasswordError
from .schemas import (
    MIN_PASSWORD_LENGTH,
    AuthPayload,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
)

# 新用户默认资料
DEFAULT_BIO = "Developer passionate about creating amazing projects."
DEFAULT_AVATAR_URL = "https://i.pravatar.cc/150?u={username}"
DEFAULT_COVER_IMAGE_URL = (
    "https://images.unsplash.com/photo-1517694712202-14dd9538aa97?w=900"
)
DEFAULT_PORTFOLIO_SUMMARY = (
    "Professional developer with a passion for building great software."
)


class AuthService:
    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def register(self, data: RegisterRequest) -> AuthPayload:
        """注册：用户与默认作品集在同一事务内创建"""
        if await self.user_repo.exists_by_email_or_username(data.email, data.username):
            raise DuplicateUserError()

        # Argon2 是 CPU 密集型操作，放到线程池里执行
        hashed_password = await run_in_threadpool(hash_password, data.password)
        user = User(
            name=data.name,
            username=data.username,
            email=data.email,
            hashed_password=hashed_password,
            bio=DEFAULT_BIO,
            avatar_url=DEFAULT_AVATAR_URL.format(username=data.username),
            cover_image_url=DEFAULT_COVER_IMAGE_URL,
        )
        portfolio = Portfolio(
            summary=DEFAULT_PORTFOLIO_SUMMARY,
            experience="",
            education="",
        )

        match await self.user_repo.create_with_portfolio(user, portfolio):
            case Ok(value=created):
                logger.info("User registered: {}", created.username)
                return AuthPayload(
                    user=UserBrief.model_validate(created),
                    token=create_access_token(created.id),
                )
            case Conflict():
                # 预检查之后的并发注册，由数据库唯一约束兜底
                raise DuplicateUserError()
            case StoreFailure(error=error):
                raise TransactionFailedError("Error registering user") from error
            case unreachable:
                assert_never(unreachable)

    async def authenticate(self, data: LoginRequest) -> AuthPayload:
        """校验用户凭证并签发 access token"""
        user = await self.user_repo.get_by_email(data.email)
        hashed = user.hashed_password if user else DUMMY_PASSWORD_HASH
        valid = await run_in_threadpool(verify_password, data.password, hashed)
        if not user or not valid:
            logger.info("Failed login attempt for {}", data.email)
            raise InvalidCredentialsError()

        return AuthPayload(
            user=UserBrief.model_validate(user),
            token=create_access_token(user.id),
        )

    async def change_password(self, user_id: UUID, data: ChangePasswordRequest) -> None:
        """修改密码"""
        if not data.current_password or not data.new_password:
            raise PasswordsRequiredError()
        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortError()

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        if not await run_in_threadpool(
            verify_password, data.current_password, user.hashed_password
        ):
            raise WrongPasswordError()

        new_hash = await run_in_threadpool(hash_password, data.new_password)
        match await self.user_repo.update_password(user_id, new_hash):
            case Ok():
                logger.info("Password changed for {}", user_id)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error changing password") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)
