"""项目模块 - 异常"""

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import ForbiddenError, NotFoundError


class ProjectNotFoundError(NotFoundError):
    code = ErrorCode.PROJECT_NOT_FOUND
    message = "Project not found"


class NotProjectOwnerError(ForbiddenError):
    """项目存在，但调用者不是所有者"""

    def __init__(self, action: str) -> None:
        super().__init__(f"Not authorized to {action} this project")
