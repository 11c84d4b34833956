"""私信模块 - 路由

所有接口都需要认证。/conversations 和 /unread/count 必须声明在 /{user_id} 之前。
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from devfolio.modules.auth.dependencies import CurrentUser
from devfolio.schemas.response import ApiPagedResponse, ApiResponse, Pagination
from .dependencies import MessageServiceDep
from .schemas import (
    Conversation,
    MessageCreate,
    MessageResponse,
    ReadReceipt,
    Thread,
    UnreadCount,
)

router = APIRouter()


@router.get("/conversations", response_model=ApiResponse[list[Conversation]])
async def list_conversations(
    caller: CurrentUser, service: MessageServiceDep
) -> ApiResponse[list[Conversation]]:
    """会话列表（每个对象一条最近消息）"""
    return ApiResponse(data=await service.conversations(caller.user_id))


@router.get("/unread/count", response_model=ApiResponse[UnreadCount])
async def unread_count(
    caller: CurrentUser, service: MessageServiceDep
) -> ApiResponse[UnreadCount]:
    count = await service.unread_count(caller.user_id)
    return ApiResponse(data=UnreadCount(unread_count=count))


@router.get("/{user_id}", response_model=ApiPagedResponse[Thread])
async def get_thread(
    user_id: UUID,
    caller: CurrentUser,
    service: MessageServiceDep,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ApiPagedResponse[Thread]:
    """与某个用户的会话（对方发来的未读消息随之标记为已读）"""
    thread = await service.thread(caller.user_id, user_id, limit=limit, offset=offset)
    return ApiPagedResponse(
        data=thread,
        pagination=Pagination(limit=limit, offset=offset, count=len(thread.messages)),
    )


@router.post(
    "",
    response_model=ApiResponse[MessageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    data: MessageCreate,
    caller: CurrentUser,
    service: MessageServiceDep,
) -> ApiResponse[MessageResponse]:
    message = await service.send(caller.user_id, data)
    return ApiResponse(message="Message sent successfully", data=message)


@router.put("/{message_id}/read", response_model=ApiResponse[ReadReceipt])
async def mark_read(
    message_id: UUID,
    caller: CurrentUser,
    service: MessageServiceDep,
) -> ApiResponse[ReadReceipt]:
    """标记已读（仅接收者）"""
    receipt = await service.mark_read(caller.user_id, message_id)
    return ApiResponse(message="Message marked as read", data=receipt)


@router.delete("/{message_id}", response_model=ApiResponse[None])
async def delete_message(
    message_id: UUID,
    caller: CurrentUser,
    service: MessageServiceDep,
) -> ApiResponse[None]:
    """删除消息（仅发送者）"""
    await service.delete(caller.user_id, message_id)
    return ApiResponse(message="Message deleted successfully")
