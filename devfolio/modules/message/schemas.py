"""私信模块 - Schema"""

from uuid import UUID

from pydantic import Field

from devfolio.modules.user.schemas import UserCard
from devfolio.schemas.datetime_types import UTCDateTime
from devfolio.schemas.response import BaseSchema

MAX_MESSAGE_LENGTH = 5000


class MessageCreate(BaseSchema):
    recipient_id: UUID
    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)


class MessageResponse(BaseSchema):
    id: UUID
    sender_id: UUID
    recipient_id: UUID
    message: str
    is_read: bool
    created_at: UTCDateTime


class LastMessage(BaseSchema):
    text: str
    time: UTCDateTime
    is_read: bool
    sent_by_me: bool


class Conversation(BaseSchema):
    """会话列表条目：对方用户及最近一条消息"""

    user: UserCard
    last_message: LastMessage


class ThreadMessage(BaseSchema):
    id: UUID
    message: str
    is_read: bool
    created_at: UTCDateTime
    sent_by_me: bool
    sender: UserCard


class Thread(BaseSchema):
    other_user: UserCard
    messages: list[ThreadMessage] = []


class UnreadCount(BaseSchema):
    unread_count: int


class ReadReceipt(BaseSchema):
    id: UUID
    is_read: bool
