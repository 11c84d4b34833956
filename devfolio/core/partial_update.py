"""部分更新语句构建

按“字段是否出现在请求中”决定是否更新（pydantic 的 model_fields_set），
而不是按值是否为 None：显式传入的空字符串会被写入，省略的字段保持不变。
SET 子句的列顺序由调用方给出的固定字段列表决定，生成的语句是确定的。
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Update, update

from devfolio.core.database import Base


def changed_fields(changes: BaseModel, fields: Sequence[str]) -> dict[str, Any]:
    """按固定字段顺序取出请求中出现的字段"""
    present = changes.model_fields_set
    return {name: getattr(changes, name) for name in fields if name in present}


def build_partial_update(
    model: type[Base],
    fields: Sequence[str],
    changes: BaseModel,
    where: ColumnElement[bool],
) -> Update | None:
    """构建 UPDATE 语句；没有任何字段需要更新时返回 None"""
    values = changed_fields(changes, fields)
    if not values:
        return None
    pairs = [(getattr(model, name), value) for name, value in values.items()]
    return (
        update(model)
        .where(where)
        .ordered_values(*pairs)
        .execution_options(synchronize_session=False)
    )


def reject_explicit_null(changes: BaseModel, fields: Sequence[str]) -> None:
    """非空列可以省略，但不能显式传 null"""
    nulls = [
        name
        for name in fields
        if name in changes.model_fields_set and getattr(changes, name) is None
    ]
    if nulls:
        msg = f"{', '.join(nulls)} cannot be null"
        raise ValueError(msg)
