"""统一响应模型"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseSchema(BaseModel):
    """
    所有 Schema 的基类

    特性：
    - from_attributes: 支持 ORM 模型转换
    - str_strip_whitespace: 自动去除字符串首尾空白

    注意：datetime 字段请使用 UTCDateTime 类型（见 datetime_types.py）
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


class Pagination(BaseModel):
    """偏移分页（count 为本页条数）"""

    limit: int
    offset: int
    count: int


class PaginationTotal(BaseModel):
    """偏移分页（total 为本页条数，沿用用户列表的字段名）"""

    limit: int
    offset: int
    total: int


class ApiResponse(BaseModel, Generic[T]):
    """成功响应信封"""

    success: bool = True
    message: str | None = None
    data: T | None = None


class ApiPagedResponse(BaseModel, Generic[T]):
    """分页列表响应"""

    success: bool = True
    message: str | None = None
    data: T
    pagination: Pagination | PaginationTotal


class ErrorResponse(BaseModel):
    """错误响应"""

    success: bool = False
    message: str
    error: str | None = None
    errors: list[dict] | None = None


class HealthStatus(BaseModel):
    """健康检查（不使用响应信封）"""

    status: str = "OK"
    timestamp: str
    uptime: float
