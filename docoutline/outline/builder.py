from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from docoutline.interfaces.resolver import TitleResolver
from docoutline.logging_utils import get_logger
from docoutline.models.blocks import TEXT_CONTENT, TEXT_NODE_NAME, BlockElement, Document, text_type_precedence
from docoutline.models.outline import (
    DEFAULT_REFERENCE_PRIORITY,
    REFERENCE_NODE_TYPE,
    ROOT_NODE_ID,
    ROOT_NODE_TYPE,
    OutlineNode,
    reference_node_id,
)
from docoutline.settings import DEFAULT_UNTITLED_TITLE, Settings

logger = get_logger(__name__)

REFERENCE_EMBED_TYPE = "reference"


@dataclass(slots=True)
class OutlineBuilderConfig:
    """Configuration for turning documents into outline trees."""

    untitled_title: str = DEFAULT_UNTITLED_TITLE
    reference_priority: int = DEFAULT_REFERENCE_PRIORITY
    text_model_name: str = TEXT_CONTENT

    @classmethod
    def from_settings(cls, settings: Settings) -> "OutlineBuilderConfig":
        return cls(
            untitled_title=settings.untitled_title,
            reference_priority=settings.reference_priority,
        )


@dataclass(slots=True)
class OutlineBuilderOptions:
    """Per-call collaborators for :meth:`OutlineBuilder.build`."""

    resolver: TitleResolver
    references_collector: Optional[List[OutlineNode]] = None


class OutlineBuilder:
    """Build a heading outline with cross-document references from a block document.

    Headings are nested with an explicit stack of open nodes ordered by
    priority; the root (priority 0) stays at the bottom for the whole walk.
    References found in ordinary text are attached under whichever heading
    is open at that point.
    """

    def __init__(self, config: OutlineBuilderConfig | None = None) -> None:
        self.config = config or OutlineBuilderConfig()

    # ------------------------------------------------------------------ public API
    async def build(self, document: Document, options: OutlineBuilderOptions) -> OutlineNode:
        root = OutlineNode(
            id=ROOT_NODE_ID,
            title=document.title_text or self.config.untitled_title,
            priority=0,
            node_type=ROOT_NODE_TYPE,
        )
        stack: List[OutlineNode] = [root]
        headings = references = 0

        for block in document.body.iter_children():
            text_type = block.get_attribute("textType") if block.node_name == TEXT_NODE_NAME else None
            precedence = text_type_precedence(text_type)
            if isinstance(text_type, str) and precedence > 0:
                if self._push_heading(stack, block, text_type, precedence):
                    headings += 1
            else:
                references += await self._collect_references(stack[-1], block, options)

        logger.info(
            "Built outline %r: %d headings, %d references",
            root.title,
            headings,
            references,
        )
        return root

    # ------------------------------------------------------------------ headings
    def _push_heading(
        self,
        stack: List[OutlineNode],
        block: BlockElement,
        text_type: str,
        precedence: int,
    ) -> bool:
        text_model = block.get_text_model(self.config.text_model_name)
        title = str(text_model).strip() if text_model is not None else ""
        if not title:
            logger.debug("Skipping empty %s heading %s", text_type, block.id)
            return False

        node = OutlineNode(id=block.id, title=title, priority=precedence, node_type=text_type)
        top = stack[-1]
        if precedence < top.priority:
            top = self._pop_to_priority(stack, precedence)

        if precedence == top.priority:
            stack[-2].add_child(node)
            stack[-1] = node
        else:
            top.add_child(node)
            stack.append(node)
        return True

    @staticmethod
    def _pop_to_priority(stack: List[OutlineNode], priority: int) -> OutlineNode:
        while len(stack) > 1 and stack[-1].priority > priority:
            stack.pop()
        return stack[-1]

    # ------------------------------------------------------------------ references
    async def _collect_references(
        self,
        parent: OutlineNode,
        block: BlockElement,
        options: OutlineBuilderOptions,
    ) -> int:
        text_model = block.get_text_model(self.config.text_model_name)
        if text_model is None:
            return 0

        inserted = 0
        for embed in text_model.embeds():
            if embed.get("type") != REFERENCE_EMBED_TYPE:
                continue
            document_id = embed.get("docId")
            if not isinstance(document_id, str) or not document_id:
                logger.debug("Skipping reference without docId in block %s", block.id)
                continue

            title = await options.resolver.resolve(document_id)
            if title is None:
                logger.debug("Reference %s in block %s did not resolve", document_id, block.id)
                continue

            node = OutlineNode(
                id=reference_node_id(document_id),
                title=title,
                priority=self.config.reference_priority,
                node_type=REFERENCE_NODE_TYPE,
            )
            if not parent.add_child_if_absent(node):
                continue
            inserted += 1
            if options.references_collector is not None:
                options.references_collector.append(node)
        return inserted


__all__ = ["OutlineBuilder", "OutlineBuilderConfig", "OutlineBuilderOptions"]
