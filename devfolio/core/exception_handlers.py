"""全局异常处理器

所有错误统一为 {"success": false, "message": ..., "error": <ErrorCode>} 信封，
401 附带 WWW-Authenticate: Bearer。
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import ApiError

# 框架抛出的 HTTPException 状态码 → 错误码
_HTTP_STATUS_CODES = {
    400: ErrorCode.INVALID_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.ROUTE_NOT_FOUND,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def error_response(
    status_code: int,
    message: str,
    code: ErrorCode,
    *,
    detail: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict = {"success": False, "message": message, "error": code}
    if detail:
        content.update(detail)
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.opt(exception=exc.__cause__).error(
            "{} {} failed: {} ({})", request.method, request.url.path, exc.message, exc.code
        )
    else:
        logger.info("{} {} rejected: {} ({})", request.method, request.url.path, exc.message, exc.code)
    return error_response(exc.status_code, exc.message, exc.code, detail=exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求校验失败：400，逐字段列出错误（字段名去掉 body / query / path 前缀）"""
    errors = []
    for error in exc.errors():
        loc = error["loc"]
        field = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else str(loc[0])
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})
    return error_response(
        400, "Validation failed", ErrorCode.INVALID_PARAMETER, detail={"errors": errors}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.SYSTEM_ERROR)
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return error_response(exc.status_code, message, code, headers=exc.headers)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """读路径上未被归类的存储异常（写路径已由 Service 转为 TransactionFailedError）"""
    logger.opt(exception=exc).error("Store error on {} {}", request.method, request.url.path)
    return error_response(500, "Store error", ErrorCode.STORE_ERROR)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return error_response(500, "Internal server error", ErrorCode.SYSTEM_ERROR)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
