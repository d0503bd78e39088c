"""Recursive rendering of document nodes by kind."""

from typing import Any, Callable, Optional, Sequence

from lexical_render.core.context import RenderContext
from lexical_render.core.decoder import FormatDecoder
from lexical_render.core.emitter import RenderEmitter
from lexical_render.core.recovery import ErrorRecoveryPolicy, NodePath
from lexical_render.exceptions import DepthLimitError, NodeLimitError
from lexical_render.formatting.ir import (
    CodeNode,
    HeadingNode,
    ListItemNode,
    ListNode,
    Node,
    NodeKind,
    ParagraphNode,
    QuoteNode,
    RenderedNode,
    TextNode,
    UnknownNode,
    node_from_dict,
)


class NodeDispatcher:
    """Render raw nodes into RenderedNode trees.

    Every node, at every depth, is rendered inside its own recovery
    bracket: a failure drops that node only.

    Args:
        decoder: Turns text format masks into wrapper nodes
        emitter: Assembles and keys rendered children
        recovery: Records problems and supplies fallbacks
    """

    def __init__(
        self,
        decoder: Optional[FormatDecoder] = None,
        emitter: Optional[RenderEmitter] = None,
        recovery: Optional[ErrorRecoveryPolicy] = None,
    ) -> None:
        self.decoder = decoder or FormatDecoder()
        self.emitter = emitter or RenderEmitter()
        self.recovery = recovery or ErrorRecoveryPolicy()

        self._handlers: dict[type, Callable[..., Optional[RenderedNode]]] = {
            TextNode: self._render_text,
            ParagraphNode: self._render_paragraph,
            HeadingNode: self._render_heading,
            ListNode: self._render_list,
            ListItemNode: self._render_list_item,
            QuoteNode: self._render_quote,
            CodeNode: self._render_code,
        }

    def render(
        self,
        raw: Any,
        path: NodePath,
        context: RenderContext,
    ) -> Optional[RenderedNode]:
        """Render one raw node, recovering from any failure within it.

        Args:
            raw: The raw node object
            path: Sibling ordinals from the root to this node
            context: State of the current render call

        Returns:
            The rendered node, a fragment for unrecognized kinds, or None
            when the node renders to nothing
        """
        return self.recovery.guard_node(self._render_node, raw, path, context)

    def render_children(
        self,
        children: Sequence[Any],
        path: NodePath,
        context: RenderContext,
    ) -> list[Optional[RenderedNode]]:
        return [
            self.render(child, path + (index,), context)
            for index, child in enumerate(children)
        ]

    def _render_node(
        self,
        raw: Any,
        path: NodePath,
        context: RenderContext,
    ) -> Optional[RenderedNode]:
        if raw is None:
            return None

        if len(path) > context.max_depth:
            raise DepthLimitError(
                f"nesting exceeds maximum depth of {context.max_depth}"
            )

        if context.visited >= context.max_nodes:
            if context.truncated:
                return None
            context.truncated = True
            raise NodeLimitError(
                f"document exceeds {context.max_nodes} nodes, output truncated"
            )
        context.visited += 1

        node = node_from_dict(raw)
        handler = self._handlers.get(type(node), self._render_unknown)
        return handler(node, path, context)

    # -------------------------------------------------------------------------
    # Rules per node kind
    # -------------------------------------------------------------------------

    def _render_text(
        self, node: TextNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        literal = RenderedNode(kind=NodeKind.TEXT, text=node.text)
        if not node.format:
            return literal
        return self.decoder.wrap(node.format, literal)

    def _render_paragraph(
        self, node: ParagraphNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        return self.emitter.container(
            NodeKind.PARAGRAPH, self.render_children(node.children, path, context)
        )

    def _render_heading(
        self, node: HeadingNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        return self.emitter.container(
            NodeKind.HEADING,
            self.render_children(node.children, path, context),
            level=node.level,
        )

    def _render_list(
        self, node: ListNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        return self.emitter.list_container(
            node.ordered, self.render_children(node.children, path, context)
        )

    def _render_list_item(
        self, node: ListItemNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        return self.emitter.container(
            NodeKind.LIST_ITEM, self.render_children(node.children, path, context)
        )

    def _render_quote(
        self, node: QuoteNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        return self.emitter.container(
            NodeKind.QUOTE, self.render_children(node.children, path, context)
        )

    def _render_code(
        self, node: CodeNode, path: NodePath, context: RenderContext
    ) -> RenderedNode:
        # Usually a single text run, but any number of children is rendered
        return self.emitter.container(
            NodeKind.CODE, self.render_children(node.children, path, context)
        )

    def _render_unknown(
        self, node: Node, path: NodePath, context: RenderContext
    ) -> Optional[RenderedNode]:
        """Fallback rule: render the children with no wrapping of our own."""
        node_type = node.type if isinstance(node, UnknownNode) else type(node).__name__
        self.recovery.note_unknown(context, node_type, path)
        children = getattr(node, "children", ())
        return self.emitter.fragment(self.render_children(children, path, context))
