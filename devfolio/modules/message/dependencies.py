"""私信模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from devfolio.dependencies import DBSession
from devfolio.modules.user.dependencies import get_user_repository
from devfolio.modules.user.repository import UserRepository
from .repository import MessageRepository
from .service import MessageService


def get_message_repository(db: DBSession) -> MessageRepository:
    return MessageRepository(db)


def get_message_service(
    repository: Annotated[MessageRepository, Depends(get_message_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> MessageService:
    return MessageService(repository, user_repo)


MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
