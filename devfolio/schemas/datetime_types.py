"""时间类型

数据库统一存 UTC。SQLite 等驱动读回时可能丢失时区，这里把 naive 值当作 UTC；
对外一律输出带 Z 后缀的 ISO8601 字符串。
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_z(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")


UTCDateTime = Annotated[datetime, AfterValidator(as_utc), PlainSerializer(to_iso_z)]
