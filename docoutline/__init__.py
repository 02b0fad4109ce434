"""Outline generation for block-structured documents."""

from .models.outline import OutlineNode
from .outline.builder import OutlineBuilder, OutlineBuilderConfig, OutlineBuilderOptions

__all__ = ["OutlineNode", "OutlineBuilder", "OutlineBuilderConfig", "OutlineBuilderOptions"]
