"""Collaborator interfaces used by the outline builder."""

from .resolver import MappingTitleResolver, TitleResolver

__all__ = ["MappingTitleResolver", "TitleResolver"]
