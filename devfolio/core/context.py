"""请求元数据（ContextVar）

只保存日志需要的 request_id / 客户端 IP / UA。
调用者身份不放在这里，而是由认证依赖以 AuthContext 显式传给处理函数。
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str
    ip_address: str = "unknown"
    user_agent: str | None = None


_current: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def current_request() -> RequestContext | None:
    """当前请求的元数据；不在请求中时为 None"""
    return _current.get()


def bind_request(ctx: RequestContext) -> Token[RequestContext | None]:
    return _current.set(ctx)


def unbind_request(token: Token[RequestContext | None]) -> None:
    _current.reset(token)
