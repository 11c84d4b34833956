"""用户模块 - 业务逻辑层"""

from collections.abc import Iterable
from typing import assert_never
from uuid import UUID

from loguru import logger

from devfolio.core.exceptions import NoFieldsToUpdateError, TransactionFailedError
from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, cause_of

from .exceptions import DuplicateEmailError, UserNotFoundError
from .models import SOCIAL_PLATFORMS
from .repository import UserRepository
from .schemas import (
    ProfileResponse,
    ProfileUpdate,
    PublicProfile,
    Socials,
    SocialsUpdate,
    UserListItem,
    UserProfile,
)


def normalize_skills(skills: Iterable[str]) -> list[str]:
    """去掉空白项并去重（保留首次出现的顺序）"""
    seen: dict[str, None] = {}
    for skill in skills:
        label = skill.strip()
        if label:
            seen.setdefault(label, None)
    return list(seen)


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def get_profile(self, user_id: UUID) -> UserProfile:
        """当前用户资料（含技能和社交链接）"""
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        return UserProfile(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            bio=user.bio,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            skills=await self.repository.get_skills(user.id),
            socials=Socials(**await self.repository.get_socials(user.id)),
        )

    async def get_public_profile(self, username: str) -> PublicProfile:
        """按用户名获取公开资料"""
        user = await self.repository.get_by_username(username)
        if not user:
            raise UserNotFoundError()
        return PublicProfile(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            bio=user.bio,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            created_at=user.created_at,
            skills=await self.repository.get_skills(user.id),
            socials=Socials(**await self.repository.get_socials(user.id)),
            project_count=await self.repository.count_projects(user.id),
        )

    async def search(
        self,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[UserListItem]:
        """用户发现列表"""
        rows = await self.repository.search(search=search, limit=limit, offset=offset)
        skills = await self.repository.get_skills_for([user.id for user, _ in rows])
        return [
            UserListItem(
                id=user.id,
                name=user.name,
                username=user.username,
                bio=user.bio,
                avatar_url=user.avatar_url,
                skills=skills.get(user.id, []),
                project_count=project_count,
            )
            for user, project_count in rows
        ]

    async def update_profile(self, user_id: UUID, changes: ProfileUpdate) -> ProfileResponse:
        """部分更新资料"""
        if not changes.model_fields_set:
            raise NoFieldsToUpdateError()

        match await self.repository.update_profile(user_id, changes):
            case Ok(value=user):
                return ProfileResponse.model_validate(user)
            case NotFound():
                raise UserNotFoundError()
            case Conflict():
                raise DuplicateEmailError()
            case StoreFailure(error=error):
                raise TransactionFailedError("Error updating profile") from error
            case unreachable:
                assert_never(unreachable)

    async def replace_skills(self, user_id: UUID, skills: list[str]) -> list[str]:
        """整组替换技能"""
        match await self.repository.replace_skills(user_id, normalize_skills(skills)):
            case Ok(value=saved):
                return saved
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error updating skills") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)

    async def replace_socials(self, user_id: UUID, socials: SocialsUpdate) -> Socials:
        """整组替换社交链接：只写入非空的平台"""
        links = {
            platform: url
            for platform in SOCIAL_PLATFORMS
            if (url := getattr(socials, platform))
        }
        match await self.repository.replace_social_links(user_id, links):
            case Ok():
                return Socials(**socials.model_dump())
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error updating social links") from cause_of(
                    failure
                )
            case unreachable:
                assert_never(unreachable)

    async def delete_account(self, user_id: UUID) -> None:
        """删除账号（级联删除其全部数据）"""
        match await self.repository.delete(user_id):
            case Ok():
                logger.info("Account deleted: {}", user_id)
            case NotFound():
                raise UserNotFoundError()
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error deleting account") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)
