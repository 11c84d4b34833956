"""私信模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from devfolio.core.database import Base, TimestampMixin


class Message(TimestampMixin, Base):
    """
    私信

    创建后只有 is_read 可变：发送者可以删除，接收者可以标记已读。
    """

    __tablename__ = "messages"

    sender_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    recipient_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    message: Mapped[str] = mapped_column(Text)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        Index("ix_messages_recipient_unread", "recipient_id", "is_read"),
    )
