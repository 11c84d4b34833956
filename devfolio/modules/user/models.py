"""用户模块 - ORM 模型"""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from devfolio.core.database import Base, TimestampMixin

SOCIAL_PLATFORMS = ("github", "linkedin", "twitter", "website")


class User(TimestampMixin, Base):
    """
    用户模型

    继承自 Base / TimestampMixin，自动获得：
    - id: UUIDv7 主键
    - created_at, updated_at: 时间戳

    删除用户时，作品集、项目、技能、社交链接和私信由外键级联删除。
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100))
    username: Mapped[str] = mapped_column(String(50), unique=True)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text, default=None)
    avatar_url: Mapped[str | None] = mapped_column(String(500), default=None)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), default=None)


class UserSkill(Base):
    """用户技能（整组替换）"""

    __tablename__ = "user_skills"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    skill: Mapped[str] = mapped_column(String(100))

    __table_args__ = (UniqueConstraint("user_id", "skill"),)


class SocialLink(Base):
    """社交链接（每个平台至多一条，整组替换）"""

    __tablename__ = "social_links"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    platform: Mapped[str] = mapped_column(String(20))
    url: Mapped[str] = mapped_column(String(500))

    __table_args__ = (UniqueConstraint("user_id", "platform"),)
