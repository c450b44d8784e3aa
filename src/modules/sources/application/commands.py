"""Source application commands."""

from pydantic import BaseModel


class CreateSourceCommand(BaseModel):
    """Create a new source.

    字段允许为空，由 handler 统一做领域校验（返回 400 而非 422）。
    """

    directory_name: str | None = None
    source_url: str | None = None
    extension: str | None = None


class DeleteSourceCommand(BaseModel):
    """Delete a source and its cached content."""

    directory_name: str


class RefreshSourceCommand(BaseModel):
    """Enqueue a refresh of one source."""

    directory_name: str


class RefreshAllCommand(BaseModel):
    """Enqueue a scheduled batch run."""


class UpdateIntervalCommand(BaseModel):
    """Update the refresh interval."""

    hours: int
