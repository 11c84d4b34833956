"""作品集模块 - Schema"""

from uuid import UUID

from devfolio.modules.user.schemas import Socials
from devfolio.schemas.datetime_types import UTCDateTime
from devfolio.schemas.response import BaseSchema


class PortfolioOwner(BaseSchema):
    id: UUID
    name: str
    username: str
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None


class FeaturedProject(BaseSchema):
    id: UUID
    title: str
    description: str
    image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    created_at: UTCDateTime


class PortfolioProject(FeaturedProject):
    is_featured: bool


class _PortfolioView(BaseSchema):
    id: UUID
    summary: str | None = None
    experience: str | None = None
    education: str | None = None
    skills: list[str] = []
    socials: Socials = Socials()
    user: PortfolioOwner
    created_at: UTCDateTime
    updated_at: UTCDateTime


class PublicPortfolio(_PortfolioView):
    """公开作品集：只包含精选项目"""

    featured_projects: list[FeaturedProject] = []


class OwnPortfolio(_PortfolioView):
    """本人作品集：包含全部项目及其精选状态"""

    projects: list[PortfolioProject] = []


class PortfolioUpdate(BaseSchema):
    """
    作品集更新（单个事务）

    - summary / experience / education: 部分更新，只写入请求中出现的字段
    - skills: 出现时整组替换（[] 即清空），省略或 null 时不动
    - featured_projects: 出现时整组替换精选项目，不属于自己的 id 被忽略
    """

    summary: str | None = None
    experience: str | None = None
    education: str | None = None
    skills: list[str] | None = None
    featured_projects: list[UUID] | None = None


class PortfolioUpdated(BaseSchema):
    id: UUID
    summary: str | None = None
    experience: str | None = None
    education: str | None = None
    skills: list[str] = []
    updated_at: UTCDateTime
