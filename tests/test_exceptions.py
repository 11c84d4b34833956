from devfolio.core.error_codes import ErrorCode
from devfolio.core.exceptions import TransactionFailedError, UnauthorizedError
from devfolio.modules.project.exceptions import NotProjectOwnerError, ProjectNotFoundError


class TestApiError:
    def test_class_defaults(self):
        exc = ProjectNotFoundError()
        assert exc.status_code == 404
        assert exc.code == ErrorCode.PROJECT_NOT_FOUND
        assert exc.message == "Project not found"
        assert str(exc) == "Project not found"

    def test_override_message_and_code(self):
        exc = UnauthorizedError("Token expired", code=ErrorCode.TOKEN_EXPIRED)
        assert exc.status_code == 401
        assert exc.code == ErrorCode.TOKEN_EXPIRED
        assert exc.message == "Token expired"
        # 类属性不受实例覆盖影响
        assert UnauthorizedError().code == ErrorCode.UNAUTHORIZED

    def test_owner_error_names_action(self):
        exc = NotProjectOwnerError("delete")
        assert exc.status_code == 403
        assert exc.message == "Not authorized to delete this project"

    def test_transaction_failed_is_server_error(self):
        exc = TransactionFailedError("Error updating portfolio")
        assert exc.status_code == 500
        assert exc.code == ErrorCode.TRANSACTION_FAILED
