from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

TEXT_NODE_NAME = "Text"
TITLE_NODE_NAME = "Title"
BODY_NODE_NAME = "Body"
TEXT_CONTENT = "textContent"


class TextType(str, Enum):
    NORMAL = "normal"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    BULLETED = "bulleted"
    NUMBERED = "numbered"
    CHECKBOX = "checkbox"
    QUOTED = "quoted"


_HEADING_PRECEDENCE: Dict[str, int] = {
    TextType.HEADING1.value: 1,
    TextType.HEADING2.value: 2,
    TextType.HEADING3.value: 3,
}


def text_type_precedence(text_type: object) -> int:
    """Return the heading depth of a text type, or 0 when it is not a heading."""

    if isinstance(text_type, TextType):
        text_type = text_type.value
    if not isinstance(text_type, str):
        return 0
    return _HEADING_PRECEDENCE.get(text_type, 0)


@dataclass(slots=True)
class DeltaOp:
    """A single insert run of a rich-text delta: plain text or an embedded object."""

    insert: Union[str, Dict[str, Any]]
    attributes: Optional[Dict[str, Any]] = None


@dataclass(slots=True)
class TextModel:
    ops: List[DeltaOp] = field(default_factory=list)

    @classmethod
    def from_ops(cls, ops: Sequence[Mapping[str, Any]], *, location: str = "$") -> "TextModel":
        if isinstance(ops, (str, bytes, Mapping)) or not isinstance(ops, Sequence):
            raise ValueError(f"Delta ops at {location} must be a list")
        model = cls()
        for index, raw in enumerate(ops):
            if not isinstance(raw, Mapping):
                raise ValueError(f"Delta op #{index} at {location} is not an object")
            if "insert" not in raw:
                raise ValueError(f"Delta op #{index} at {location} has no 'insert' field")
            insert = raw["insert"]
            if not isinstance(insert, (str, dict)):
                raise ValueError(
                    f"Delta op #{index} at {location} has unsupported insert of type {type(insert).__name__}"
                )
            model.ops.append(DeltaOp(insert=insert, attributes=raw.get("attributes")))
        return model

    @classmethod
    def from_text(cls, text: str) -> "TextModel":
        return cls(ops=[DeltaOp(insert=text)] if text else [])

    def embeds(self) -> Iterator[Dict[str, Any]]:
        """Yield the structured (non-text) inserts in order."""

        for op in self.ops:
            if isinstance(op.insert, dict):
                yield op.insert

    def __str__(self) -> str:
        return "".join(op.insert for op in self.ops if isinstance(op.insert, str))


class BlockElement:
    """A node of the document tree; children form a doubly linked sibling list."""

    __slots__ = (
        "id",
        "node_name",
        "attributes",
        "text_models",
        "parent",
        "first_child",
        "last_child",
        "prev_sibling",
        "next_sibling",
    )

    def __init__(
        self,
        node_name: str,
        block_id: str,
        *,
        attributes: Optional[Dict[str, Any]] = None,
        text_models: Optional[Dict[str, TextModel]] = None,
    ) -> None:
        self.id = block_id
        self.node_name = node_name
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.text_models: Dict[str, TextModel] = dict(text_models or {})
        self.parent: Optional[BlockElement] = None
        self.first_child: Optional[BlockElement] = None
        self.last_child: Optional[BlockElement] = None
        self.prev_sibling: Optional[BlockElement] = None
        self.next_sibling: Optional[BlockElement] = None

    def __repr__(self) -> str:
        return f"BlockElement(node_name={self.node_name!r}, id={self.id!r})"

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def get_text_model(self, name: str = TEXT_CONTENT) -> Optional[TextModel]:
        return self.text_models.get(name)

    def append_child(self, child: "BlockElement") -> "BlockElement":
        if child.parent is not None:
            raise ValueError(f"{child!r} is already attached to {child.parent!r}")
        child.parent = self
        child.prev_sibling = self.last_child
        if self.last_child is None:
            self.first_child = child
        else:
            self.last_child.next_sibling = child
        self.last_child = child
        return child

    def iter_children(self) -> Iterator["BlockElement"]:
        ptr = self.first_child
        while ptr is not None:
            yield ptr
            ptr = ptr.next_sibling

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, location: str = "$") -> "BlockElement":
        if not isinstance(data, Mapping):
            raise ValueError(f"Block at {location} must be an object, got {type(data).__name__}")
        node_name = data.get("nodeName")
        block_id = data.get("id")
        if not isinstance(node_name, str) or not node_name:
            raise ValueError(f"Block at {location} is missing 'nodeName'")
        if not isinstance(block_id, str) or not block_id:
            raise ValueError(f"Block at {location} is missing 'id'")

        raw_models = data.get("textModels") or {}
        if not isinstance(raw_models, Mapping):
            raise ValueError(f"Block at {location} has non-object 'textModels'")
        text_models = {
            name: TextModel.from_ops(ops, location=f"{location}.textModels.{name}")
            for name, ops in raw_models.items()
        }
        attributes = data.get("attributes")
        if attributes is not None and not isinstance(attributes, Mapping):
            raise ValueError(f"Block at {location} has non-object 'attributes'")
        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError(f"Block at {location} has non-list 'children'")
        block = cls(
            node_name,
            block_id,
            attributes=dict(attributes) if attributes else None,
            text_models=text_models,
        )
        for index, raw_child in enumerate(children):
            block.append_child(cls.from_dict(raw_child, location=f"{location}.children[{index}]"))
        return block


@dataclass(slots=True)
class Document:
    """A document made of a title block and a body container."""

    title: BlockElement
    body: BlockElement

    @property
    def title_text(self) -> str:
        model = self.title.get_text_model(TEXT_CONTENT)
        return str(model) if model is not None else ""

    @classmethod
    def create(cls, title: str = "", *, document_id: str = "doc") -> "Document":
        title_block = BlockElement(
            TITLE_NODE_NAME,
            f"{document_id}-title",
            text_models={TEXT_CONTENT: TextModel.from_text(title)},
        )
        return cls(title=title_block, body=BlockElement(BODY_NODE_NAME, f"{document_id}-body"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        if not isinstance(data, Mapping):
            raise ValueError("Document must be a JSON object")
        if "title" not in data or "body" not in data:
            raise ValueError("Document requires both 'title' and 'body' blocks")
        return cls(
            title=BlockElement.from_dict(data["title"], location="$.title"),
            body=BlockElement.from_dict(data["body"], location="$.body"),
        )


def load_document(path: Path) -> Document:
    """Read a serialized document from a JSON file."""

    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return Document.from_dict(json.loads(path.read_text(encoding="utf-8")))


__all__ = [
    "BlockElement",
    "DeltaOp",
    "Document",
    "TEXT_CONTENT",
    "TEXT_NODE_NAME",
    "TextModel",
    "TextType",
    "load_document",
    "text_type_precedence",
]
