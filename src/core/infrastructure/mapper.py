"""Base mapper for entity-document conversion.

KV 存储中的值是 JSON 文档，字段名沿用既有部署的格式（camelCase），
领域实体保持 snake_case，由各模块的 mapper 负责双向转换。
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

E = TypeVar("E")  # Entity type

Document = dict[str, Any]


class BaseMapper(ABC, Generic[E]):
    """Base mapper for converting between domain entities and stored documents."""

    @abstractmethod
    def to_domain(self, document: Document) -> E:
        """Convert stored document to domain entity."""
        pass

    @abstractmethod
    def to_document(self, entity: E) -> Document:
        """Convert domain entity to stored document."""
        pass
