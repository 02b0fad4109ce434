"""Outline tree generation."""

from .builder import OutlineBuilder, OutlineBuilderConfig, OutlineBuilderOptions

__all__ = ["OutlineBuilder", "OutlineBuilderConfig", "OutlineBuilderOptions"]
