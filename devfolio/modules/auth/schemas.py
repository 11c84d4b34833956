"""认证模块 - Schema

密码字段不去除首尾空白，因此这里直接继承 BaseModel 而不是 BaseSchema。
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from devfolio.modules.user.schemas import USERNAME_PATTERN, UserBrief
from devfolio.schemas.response import BaseSchema

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    username: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True, min_length=3, max_length=50, pattern=USERNAME_PATTERN
        ),
    ]
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ChangePasswordRequest(BaseModel):
    """字段缺失 / 过短由 Service 返回具体错误码，这里不做长度限制"""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")


class AuthPayload(BaseSchema):
    """注册 / 登录成功返回的用户与 token"""

    user: UserBrief
    token: str
