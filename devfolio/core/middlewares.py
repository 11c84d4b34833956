"""中间件配置"""

import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from devfolio.config import get_settings
from devfolio.core.context import RequestContext, bind_request, current_request, unbind_request

settings = get_settings()

REQUEST_ID_HEADER = "X-Request-ID"

# 超过该耗时的请求以 WARNING 记录
SLOW_REQUEST_SECONDS = 1.0

# 只以 DEBUG 记录的路径（探活）
_QUIET_PATHS = frozenset({"/health"})


def client_ip(request: Request) -> str:
    """优先取反向代理写入的 X-Forwarded-For 第一跳"""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """透传或生成 X-Request-ID，并在请求期间绑定 RequestContext"""

    async def dispatch(self, request: Request, call_next):
        ctx = RequestContext(
            request_id=request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:12],
            ip_address=client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
        token = bind_request(ctx)
        try:
            response = await call_next(request)
        finally:
            unbind_request(token)
        response.headers[REQUEST_ID_HEADER] = ctx.request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """访问日志：方法、路径、状态码、耗时"""

    async def dispatch(self, request: Request, call_next):
        ctx = current_request()
        request_id = ctx.request_id if ctx else "-"
        started = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                # 未处理异常由外层 ServerErrorMiddleware 渲染为 500，这里只补访问日志
                logger.error(
                    "{} {} -> 500 in {:.3f}s",
                    request.method,
                    request.url.path,
                    time.perf_counter() - started,
                )
                raise
            elapsed = time.perf_counter() - started
            if request.url.path in _QUIET_PATHS:
                level = "DEBUG"
            elif elapsed >= SLOW_REQUEST_SECONDS:
                level = "WARNING"
            else:
                level = "INFO"
            logger.log(
                level,
                "{} {} -> {} in {:.3f}s",
                request.method,
                request.url.path,
                response.status_code,
                elapsed,
            )

        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response


def setup_middlewares(app: FastAPI) -> None:
    """注册中间件（后注册的在外层，先执行）"""
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(LoggingMiddleware)
    # 最外层：后面的中间件都能读到 RequestContext
    app.add_middleware(RequestContextMiddleware)
