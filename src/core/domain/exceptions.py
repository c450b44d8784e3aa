"""Base domain exceptions.

领域异常携带 http_status_code 与 error_code，由 domain_exception_handler
转换为 {"error": {"code", "message"}} 响应；未继承 DomainException 的异常一律返回 500。
"""

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors."""

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, identifier: str):
        super().__init__(f"{entity_type} '{identifier}' not found")


class DuplicateEntityError(DomainException):
    """Raised when a duplicate entity is detected."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "DUPLICATE_ENTITY"

    def __init__(self, entity_type: str, field: str, value: str):
        message = f"{entity_type} with {field} '{value}' already exists"
        super().__init__(message)


class ValidationError(DomainException):
    """Raised when validation fails."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class AuthenticationError(DomainException):
    """Raised when the caller cannot be authenticated."""

    http_status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"
