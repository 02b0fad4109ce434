from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional


class TitleResolver(ABC):
    """Looks up the human-readable title of another document."""

    @abstractmethod
    async def resolve(self, document_id: str) -> Optional[str]:
        """Return the title for ``document_id`` or None when it does not exist."""


class MappingTitleResolver(TitleResolver):
    """In-memory resolver backed by a dict of document id to title."""

    def __init__(self, titles: Mapping[str, str] | None = None) -> None:
        self.titles: Dict[str, str] = dict(titles or {})

    async def resolve(self, document_id: str) -> Optional[str]:
        return self.titles.get(document_id)


__all__ = ["MappingTitleResolver", "TitleResolver"]
