"""项目模块 - Schema"""

from typing import Annotated, Literal
from uuid import UUID

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError, model_validator

from devfolio.core.partial_update import reject_explicit_null
from devfolio.schemas.datetime_types import UTCDateTime
from devfolio.schemas.response import BaseSchema

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """校验 URL 格式，但原样保存（不做规范化）"""
    try:
        _http_url.validate_python(value)
    except ValidationError as exc:
        raise ValueError("Please provide a valid URL") from exc
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]

ProjectSort = Literal["recent", "popular"]


class ProjectCreate(BaseSchema):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    image_url: str | None = None
    demo_url: UrlStr | None = None
    github_url: UrlStr | None = None


class ProjectUpdate(BaseSchema):
    """部分更新：只更新请求中出现的字段"""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    image_url: str | None = None
    demo_url: UrlStr | None = None
    github_url: UrlStr | None = None
    is_featured: bool | None = None

    @model_validator(mode="after")
    def check_required_columns(self) -> "ProjectUpdate":
        reject_explicit_null(self, ("title", "description", "is_featured"))
        return self


class Author(BaseSchema):
    id: UUID
    name: str
    username: str
    avatar_url: str | None = None
    bio: str | None = None


class ProjectSummary(BaseSchema):
    """项目基本信息（用户项目列表）"""

    id: UUID
    title: str
    description: str
    image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    is_featured: bool
    created_at: UTCDateTime
    updated_at: UTCDateTime


class ProjectResponse(ProjectSummary):
    user_id: UUID


class ProjectWithAuthor(ProjectSummary):
    author: Author


class FeaturedToggleResponse(BaseSchema):
    project_id: UUID
    is_featured: bool
