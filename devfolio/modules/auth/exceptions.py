"""认证模块 - 异常"""

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import UnauthorizedError, ValidationError

from .schemas import MIN_PASSWORD_LENGTH


class PasswordsRequiredError(ValidationError):
    message = "Current password and new password are required"


class PasswordTooShortError(ValidationError):
    code = ErrorCode.PASSWORD_TOO_SHORT
    message = f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"


class WrongPasswordError(UnauthorizedError):
    code = ErrorCode.WRONG_PASSWORD
    message = "Current password is incorrect"
