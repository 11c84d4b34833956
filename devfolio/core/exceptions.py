"""业务异常

每个子类用类属性声明状态码、错误码与默认文案，
抛出时可以只覆盖 message（或 code），由全局处理器统一渲染为错误信封。
"""

from typing import ClassVar

from devfolio.core.error_codes import ErrorCode


class ApiError(Exception):
    status_code: ClassVar[int] = 400
    code: ErrorCode = ErrorCode.INVALID_REQUEST
    message: str = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        detail: dict | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        self.detail = detail
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}, {self.message!r})"


class NotFoundError(ApiError):
    status_code = 404
    code = ErrorCode.RESOURCE_NOT_FOUND
    message = "Resource not found"


class ValidationError(ApiError):
    code = ErrorCode.INVALID_PARAMETER
    message = "Validation failed"


class NoFieldsToUpdateError(ValidationError):
    code = ErrorCode.NO_FIELDS_TO_UPDATE
    message = "No fields to update"


class ConflictError(ApiError):
    """唯一性冲突，对外仍是 400"""

    message = "Resource conflict"


class UnauthorizedError(ApiError):
    status_code = 401
    code = ErrorCode.UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    """邮箱不存在和密码错误返回同一个错误"""

    code = ErrorCode.INVALID_CREDENTIALS
    message = "Invalid email or password"


class ForbiddenError(ApiError):
    status_code = 403
    code = ErrorCode.FORBIDDEN
    message = "Forbidden"


class StoreError(ApiError):
    status_code = 500
    code = ErrorCode.STORE_ERROR
    message = "Store error"


class TransactionFailedError(StoreError):
    """事务中某一步失败；get_db 会回滚整个请求的写入"""

    code = ErrorCode.TRANSACTION_FAILED
    message = "Transaction failed"
