"""Auth domain exceptions.

每个异常类定义自己的 http_status_code 和 error_code，
由 core/interfaces/http/exceptions.py 中的 domain_exception_handler 统一处理。
"""

from src.core.domain.exceptions import AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when the username/password pair does not match.

    不区分用户名错误还是密码错误。
    """

    error_code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class SessionInvalidError(AuthenticationError):
    """Raised when a session id is missing, malformed, unknown or expired."""

    error_code = "SESSION_INVALID"

    def __init__(self) -> None:
        super().__init__("Session is invalid or has expired")
