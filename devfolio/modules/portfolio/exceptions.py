"""作品集模块 - 异常"""

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import NotFoundError


class PortfolioNotFoundError(NotFoundError):
    code = ErrorCode.PORTFOLIO_NOT_FOUND
    message = "Portfolio not found"
