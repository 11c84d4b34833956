"""安全工具：密码哈希与 JWT

Token 是无状态的：有效性只取决于签名和过期时间，服务端不保存会话，
因此无法在过期前吊销某个 token。轮换 SECRET_KEY 会使所有已签发 token 失效。
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)
from pwdlib import PasswordHash

from devfolio.config import get_settings

settings = get_settings()

# 使用推荐的 Argon2 算法（自带随机盐）
password_hash = PasswordHash.recommended()

# 邮箱不存在时用它走一遍完整校验，使耗时与密码错误一致
DUMMY_PASSWORD_HASH = password_hash.hash("devfolio-unknown-account")


class TokenError(Exception):
    """Token 校验失败基类"""


class InvalidTokenSignature(TokenError):
    """签名不是由当前密钥生成"""


class TokenExpired(TokenError):
    """已过期"""


class MalformedToken(TokenError):
    """无法解析，或缺少有效的 sub"""


def hash_password(password: str) -> str:
    """密码哈希"""
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return password_hash.verify(plain_password, hashed_password)


def create_access_token(
    user_id: UUID,
    expires_delta: timedelta | None = None,
) -> str:
    """签发 JWT access token（sub=user_id, iat, exp）"""
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "iat": issued_at, "exp": expire}
    return jwt.encode(
        payload, settings.secret_key.get_secret_value(), algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> UUID:
    """校验 JWT 并返回 user_id

    Raises:
        InvalidTokenSignature: 签名不匹配
        TokenExpired: 已过期
        MalformedToken: 格式错误或 sub 无效
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token expired") from exc
    # InvalidSignatureError 是 DecodeError 的子类，必须先捕获
    except InvalidSignatureError as exc:
        raise InvalidTokenSignature("Invalid token signature") from exc
    except (DecodeError, InvalidTokenError) as exc:
        raise MalformedToken("Malformed token") from exc

    try:
        return UUID(payload["sub"])
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedToken("Malformed token subject") from exc
