"""Data structures for input nodes and rendered output."""

from lexical_render.formatting.ir import (
    TextFormat,
    NodeKind,
    TextNode,
    ParagraphNode,
    HeadingNode,
    ListNode,
    ListItemNode,
    QuoteNode,
    CodeNode,
    UnknownNode,
    Node,
    DocumentRoot,
    RenderedNode,
    RenderedDocument,
    node_from_dict,
)

__all__ = [
    "TextFormat",
    "NodeKind",
    "TextNode",
    "ParagraphNode",
    "HeadingNode",
    "ListNode",
    "ListItemNode",
    "QuoteNode",
    "CodeNode",
    "UnknownNode",
    "Node",
    "DocumentRoot",
    "RenderedNode",
    "RenderedDocument",
    "node_from_dict",
]
