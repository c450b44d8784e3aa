"""Source domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import (
    DomainException,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)


class SourceNotFoundError(EntityNotFoundError):
    """Raised when source is not found."""

    error_code = "SOURCE_NOT_FOUND"

    def __init__(self, directory_name: str):
        super().__init__("Source", directory_name)


class SourceAlreadyExistsError(DuplicateEntityError):
    """Raised when source with same directory name already exists."""

    error_code = "SOURCE_ALREADY_EXISTS"

    def __init__(self, directory_name: str):
        super().__init__("Source", "directoryName", directory_name)


class InvalidSourceError(ValidationError):
    """Raised when source input is invalid."""

    def __init__(self, message: str):
        super().__init__(f"Invalid source: {message}")


class InvalidIntervalError(ValidationError):
    """Raised when refresh interval is out of range."""

    def __init__(self, hours: int):
        super().__init__(f"Refresh interval must be >= 1 hour, got {hours}")


class PlaylistNotReadyError(DomainException):
    """Raised when a source exists but has no cached content yet."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "PLAYLIST_NOT_READY"

    def __init__(self, directory_name: str):
        super().__init__(f"Playlist for '{directory_name}' has not been generated yet")
