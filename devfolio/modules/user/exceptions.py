"""用户模块 - 异常"""

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    code = ErrorCode.USER_NOT_FOUND
    message = "User not found"


class DuplicateUserError(ConflictError):
    """注册时用户名或邮箱已存在（不区分是哪一个）"""

    code = ErrorCode.DUPLICATE_USER
    message = "User with this email or username already exists"


class DuplicateEmailError(ConflictError):
    code = ErrorCode.DUPLICATE_EMAIL
    message = "Email already in use"
