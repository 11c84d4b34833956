"""配置：环境变量 / .env

嵌套字段用单个下划线分隔，例如 DB_HOST、DB_PASSWORD。
"""

from functools import lru_cache
from typing import Annotated
from urllib.parse import quote

from pydantic import BaseModel, Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class DatabaseConfig(BaseModel):
    """PostgreSQL 连接参数"""

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    name: str = "devfolio"
    user: str = "postgres"
    password: SecretStr
    pool_size: int = Field(default=20, ge=1)
    max_overflow: int = Field(default=10, ge=0)

    @computed_field
    @property
    def url(self) -> str:
        # 用户名和密码里可能有 @ / : 等字符
        credentials = ":".join(
            quote(part, safe="") for part in (self.user, self.password.get_secret_value())
        )
        return f"postgresql+asyncpg://{credentials}@{self.host}:{self.port}/{self.name}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        extra="ignore",
    )

    app_name: str = "Devfolio API"
    debug: bool = False

    # 签发与校验 JWT 共用；更换后旧 token 全部失效
    secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, ge=1)

    db: DatabaseConfig

    log_level: str = "INFO"
    log_json: bool = False
    log_to_file: bool = False
    log_dir: str = "logs"

    # 逗号分隔；为空时不启用 CORS
    cors_origins: Annotated[list[str], NoDecode] = []

    @computed_field
    @property
    def database_url(self) -> str:
        return self.db.url

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
