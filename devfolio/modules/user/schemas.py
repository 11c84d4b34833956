"""用户模块 - Schema"""

from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from devfolio.core.partial_update import reject_explicit_null
from devfolio.schemas.datetime_types import UTCDateTime
from devfolio.schemas.response import BaseSchema

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class Socials(BaseSchema):
    github: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    website: str | None = None


class UserBrief(BaseSchema):
    """注册 / 登录返回的用户信息"""

    id: UUID
    name: str
    username: str
    email: str
    avatar_url: str | None = None
    created_at: UTCDateTime


class UserCard(BaseSchema):
    """嵌入作品集 / 私信中的用户卡片"""

    id: UUID
    name: str
    username: str
    avatar_url: str | None = None


class UserProfile(BaseSchema):
    """当前用户资料（含技能和社交链接）"""

    id: UUID
    name: str
    username: str
    email: str
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    skills: list[str] = []
    socials: Socials = Socials()


class PublicProfile(UserProfile):
    """按用户名查询的公开资料"""

    created_at: UTCDateTime
    project_count: int = 0


class UserListItem(BaseSchema):
    """用户发现列表条目"""

    id: UUID
    name: str
    username: str
    bio: str | None = None
    avatar_url: str | None = None
    skills: list[str] = []
    project_count: int = 0


class ProfileUpdate(BaseSchema):
    """部分更新：只更新请求中出现的字段"""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    email: EmailStr | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v

    @model_validator(mode="after")
    def check_required_columns(self) -> "ProfileUpdate":
        reject_explicit_null(self, ("name", "email"))
        return self


class ProfileResponse(BaseSchema):
    id: UUID
    name: str
    username: str
    email: str
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None


class SkillsUpdate(BaseSchema):
    skills: list[str]


class SkillsResponse(BaseSchema):
    skills: list[str]


class SocialsUpdate(Socials):
    """整组替换：只有非空的平台会写入"""
