"""全局 Schema"""

from .datetime_types import UTCDateTime
from .response import (
    ApiPagedResponse,
    ApiResponse,
    BaseSchema,
    ErrorResponse,
    HealthStatus,
    Pagination,
    PaginationTotal,
)

__all__ = [
    "UTCDateTime",
    "ApiResponse",
    "ApiPagedResponse",
    "BaseSchema",
    "ErrorResponse",
    "HealthStatus",
    "Pagination",
    "PaginationTotal",
]
