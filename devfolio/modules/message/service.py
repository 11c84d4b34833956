"""私信模块 - 业务逻辑层"""

from typing import assert_never
from uuid import UUID

from loguru import logger

from devfolio.core.exceptions import TransactionFailedError
from devfolio.core.outcome import Conflict, NotFound, Ok, StoreFailure, cause_of
from devfolio.modules.user.exceptions import UserNotFoundError
from devfolio.modules.user.repository import UserRepository
from devfolio.modules.user.schemas import UserCard

from .exceptions import MessageNotFoundError, RecipientNotFoundError, SelfMessageError
from .models import Message
from .repository import MessageRepository
from .schemas import (
    Conversation,
    LastMessage,
    MessageCreate,
    MessageResponse,
    ReadReceipt,
    Thread,
    ThreadMessage,
)


class MessageService:
    def __init__(self, repository: MessageRepository, user_repo: UserRepository) -> None:
        self.repository = repository
        self.user_repo = user_repo

    async def conversations(self, user_id: UUID) -> list[Conversation]:
        rows = await self.repository.latest_per_counterpart(user_id)
        return [
            Conversation(
                user=UserCard.model_validate(counterpart),
                last_message=LastMessage(
                    text=message.message,
                    time=message.created_at,
                    is_read=message.is_read,
                    sent_by_me=message.sender_id == user_id,
                ),
            )
            for message, counterpart in rows
        ]

    async def thread(
        self, user_id: UUID, other_id: UUID, limit: int = 50, offset: int = 0
    ) -> Thread:
        """
        获取与某个用户的会话，并把对方发来的未读消息标记为已读

        返回的 is_read 是标记之前的状态。
        """
        other = await self.user_repo.get_by_id(other_id)
        if not other:
            raise UserNotFoundError()

        rows = await self.repository.thread(user_id, other_id, limit=limit, offset=offset)
        thread = Thread(
            other_user=UserCard.model_validate(other),
            messages=[
                ThreadMessage(
                    id=message.id,
                    message=message.message,
                    is_read=message.is_read,
                    created_at=message.created_at,
                    sent_by_me=message.sender_id == user_id,
                    sender=UserCard.model_validate(sender),
                )
                for message, sender in rows
            ],
        )

        match await self.repository.mark_thread_read(user_id, other_id):
            case Ok(value=marked):
                if marked:
                    logger.debug("Marked {} messages from {} as read", marked, other_id)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error fetching messages") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)
        return thread

    async def send(self, sender_id: UUID, data: MessageCreate) -> MessageResponse:
        """发送私信：先确认接收者存在（404），再拒绝发给自己（400）"""
        if not await self.user_repo.get_by_id(data.recipient_id):
            raise RecipientNotFoundError()
        if data.recipient_id == sender_id:
            raise SelfMessageError()

        message = Message(
            sender_id=sender_id,
            recipient_id=data.recipient_id,
            message=data.message,
        )
        match await self.repository.create(message):
            case Ok(value=created):
                return MessageResponse.model_validate(created)
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error sending message") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)

    async def unread_count(self, user_id: UUID) -> int:
        return await self.repository.count_unread(user_id)

    async def mark_read(self, user_id: UUID, message_id: UUID) -> ReadReceipt:
        match await self.repository.mark_read(message_id, user_id):
            case Ok():
                return ReadReceipt(id=message_id, is_read=True)
            case NotFound():
                raise MessageNotFoundError()
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error marking message as read") from cause_of(
                    failure
                )
            case unreachable:
                assert_never(unreachable)

    async def delete(self, user_id: UUID, message_id: UUID) -> None:
        match await self.repository.delete(message_id, user_id):
            case Ok():
                logger.info("Message deleted: {}", message_id)
            case NotFound():
                raise MessageNotFoundError("Message not found or not authorized to delete")
            case Conflict() | StoreFailure() as failure:
                raise TransactionFailedError("Error deleting message") from cause_of(failure)
            case unreachable:
                assert_never(unreachable)
