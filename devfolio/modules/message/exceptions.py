"""私信模块 - 异常"""

from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import NotFoundError, ValidationError


class MessageNotFoundError(NotFoundError):
    """消息不存在，或调用者无权操作（两者不区分）"""

    code = ErrorCode.MESSAGE_NOT_FOUND
    message = "Message not found or not authorized"


class RecipientNotFoundError(NotFoundError):
    code = ErrorCode.RECIPIENT_NOT_FOUND
    message = "Recipient not found"


class SelfMessageError(ValidationError):
    code = ErrorCode.SELF_MESSAGE
    message = "Cannot send message to yourself"
