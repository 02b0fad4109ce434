"""Data structures shared across the outline package."""

from .blocks import BlockElement, DeltaOp, Document, TextModel, TextType, text_type_precedence
from .outline import OutlineNode

__all__ = [
    "BlockElement",
    "DeltaOp",
    "Document",
    "OutlineNode",
    "TextModel",
    "TextType",
    "text_type_precedence",
]
