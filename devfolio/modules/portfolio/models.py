"""作品集模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from devfolio.core.database import Base, TimestampMixin


class Portfolio(TimestampMixin, Base):
    """作品集（与用户一对一，注册时一并创建）"""

    __tablename__ = "portfolios"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )
    summary: Mapped[str | None] = mapped_column(Text, default=None)
    experience: Mapped[str | None] = mapped_column(Text, default=None)
    education: Mapped[str | None] = mapped_column(Text, default=None)
