"""私信模块 - 数据访问层"""

from uuid import UUID

from sqlalchemy import and_, case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, guarded
from devfolio.modules.user.models import User

from .models import Message


def _between(user_id: UUID, other_id: UUID):
    """两个用户之间（任一方向）的消息"""
    return or_(
        and_(Message.sender_id == user_id, Message.recipient_id == other_id),
        and_(Message.sender_id == other_id, Message.recipient_id == user_id),
    )


class MessageRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ============================================================
    # 查询方法
    # ============================================================

    async def latest_per_counterpart(self, user_id: UUID) -> list[tuple[Message, User]]:
        """
        每个会话对象的最近一条消息，按最近消息时间倒序

        返回 (消息, 对方用户)。用 row_number() 窗口函数在库内按对方用户取第一条，
        PostgreSQL 与 SQLite 3.25+ 都支持。
        """
        counterpart_id = case(
            (Message.sender_id == user_id, Message.recipient_id),
            else_=Message.sender_id,
        )
        ranked = (
            select(
                Message.id.label("message_id"),
                counterpart_id.label("counterpart_id"),
                func.row_number()
                .over(
                    partition_by=counterpart_id,
                    order_by=[Message.created_at.desc(), Message.id.desc()],
                )
                .label("rn"),
            )
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .subquery()
        )
        stmt = (
            select(Message, User)
            .join(ranked, ranked.c.message_id == Message.id)
            .join(User, User.id == ranked.c.counterpart_id)
            .where(ranked.c.rn == 1)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        result = await self.db.execute(stmt)
        return [(message, counterpart) for message, counterpart in result.all()]

    async def thread(
        self,
        user_id: UUID,
        other_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[tuple[Message, User]]:
        """两人之间的消息，按时间正序，返回 (消息, 发送者)"""
        stmt = (
            select(Message, User)
            .join(User, Message.sender_id == User.id)
            .where(_between(user_id, other_id))
            .order_by(Message.created_at.asc(), Message.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(stmt)
        return [(message, sender) for message, sender in result.all()]

    async def count_unread(self, user_id: UUID) -> int:
        stmt = select(func.count(Message.id)).where(
            Message.recipient_id == user_id, Message.is_read.is_(False)
        )
        return await self.db.scalar(stmt) or 0

    # ============================================================
    # 写操作
    # ============================================================

    async def create(self, message: Message) -> Ok[Message] | Conflict | StoreFailure:
        async def _create() -> Message:
            self.db.add(message)
            await self.db.flush()
            await self.db.refresh(message)
            return message

        return await guarded(_create())

    async def mark_thread_read(
        self, recipient_id: UUID, sender_id: UUID
    ) -> Ok[int] | Conflict | StoreFailure:
        """把 sender 发给 recipient 的未读消息全部标记为已读"""

        async def _mark() -> int:
            result = await self.db.execute(
                update(Message)
                .where(
                    Message.recipient_id == recipient_id,
                    Message.sender_id == sender_id,
                    Message.is_read.is_(False),
                )
                .values(is_read=True)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        return await guarded(_mark())

    async def mark_read(
        self, message_id: UUID, recipient_id: UUID
    ) -> Ok[None] | NotFound | Conflict | StoreFailure:
        """接收者标记单条消息已读（重复标记同样成功）"""

        async def _mark() -> int:
            result = await self.db.execute(
                update(Message)
                .where(Message.id == message_id, Message.recipient_id == recipient_id)
                .values(is_read=True)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        match await guarded(_mark()):
            case Ok(value=0):
                return NotFound()
            case Ok():
                return Ok(None)
            case outcome:
                return outcome

    async def delete(
        self, message_id: UUID, sender_id: UUID
    ) -> Ok[None] | NotFound | Conflict | StoreFailure:
        """只有发送者可以删除"""

        async def _delete() -> int:
            result = await self.db.execute(
                delete(Message)
                .where(Message.id == message_id, Message.sender_id == sender_id)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        match await guarded(_delete()):
            case Ok(value=0):
                return NotFound()
            case Ok():
                return Ok(None)
            case outcome:
                return outcome
