from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

ROOT_NODE_ID = "title"
ROOT_NODE_TYPE = "normal"
REFERENCE_NODE_TYPE = "reference"
REFERENCE_ID_PREFIX = "Ref-"
DEFAULT_REFERENCE_PRIORITY = -100


def reference_node_id(document_id: str) -> str:
    """Return the outline id used for a reference to ``document_id``."""

    return f"{REFERENCE_ID_PREFIX}{document_id}"


def referenced_document_id(node_id: str) -> Optional[str]:
    if not node_id.startswith(REFERENCE_ID_PREFIX):
        return None
    return node_id[len(REFERENCE_ID_PREFIX):]


@dataclass(slots=True)
class OutlineNode:
    """One entry of a document outline: the title root, a heading or a reference."""

    id: str
    title: str
    priority: int
    node_type: str
    children: List["OutlineNode"] = field(default_factory=list)

    @property
    def is_reference(self) -> bool:
        return self.node_type == REFERENCE_NODE_TYPE

    def add_child(self, child: "OutlineNode") -> None:
        self.children.append(child)

    def add_child_if_absent(self, child: "OutlineNode") -> bool:
        """Append ``child`` unless a child with the same id already exists.

        Returns True when the child was inserted.
        """

        if any(existing.id == child.id for existing in self.children):
            return False
        self.children.append(child)
        return True

    def iter_nodes(self) -> Iterator["OutlineNode"]:
        """Yield this node and its descendants in pre-order."""

        stack: List[OutlineNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
            "nodeType": self.node_type,
            "children": [child.to_dict() for child in self.children],
        }


__all__ = [
    "DEFAULT_REFERENCE_PRIORITY",
    "OutlineNode",
    "REFERENCE_ID_PREFIX",
    "REFERENCE_NODE_TYPE",
    "ROOT_NODE_ID",
    "ROOT_NODE_TYPE",
    "reference_node_id",
    "referenced_document_id",
]
