"""错误码定义"""

from enum import StrEnum


class ErrorCode(StrEnum):
    # 通用
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    NO_FIELDS_TO_UPDATE = "NO_FIELDS_TO_UPDATE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # 存储
    STORE_ERROR = "STORE_ERROR"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"

    # 认证 / 授权
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    WRONG_PASSWORD = "WRONG_PASSWORD"
    PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
    FORBIDDEN = "FORBIDDEN"

    # 用户
    USER_NOT_FOUND = "USER_NOT_FOUND"
    DUPLICATE_USER = "DUPLICATE_USER"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # 作品集 / 项目
    PORTFOLIO_NOT_FOUND = "PORTFOLIO_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"

    # 私信
    MESSAGE_NOT_FOUND = "MESSAGE_NOT_FOUND"
    RECIPIENT_NOT_FOUND = "RECIPIENT_NOT_FOUND"
    SELF_MESSAGE = "SELF_MESSAGE"
