"""Intermediate Representation for serialized editor documents.

This module defines the data structures on both sides of the renderer:
the typed view of input nodes (built one node at a time from the raw
JSON structure) and the rendered output tree handed to serializers and
presentation layers.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Any, Optional, Union

from lexical_render.diagnostics import Diagnostic
from lexical_render.exceptions import InvalidNodeError, LexicalRenderError


# =============================================================================
# Inline formatting
# =============================================================================

class TextFormat(Flag):
    """Inline text format flags (combinable with |).

    Values match the editor's serialized ``format`` bit-mask.
    """

    NONE = 0
    BOLD = 1
    ITALIC = 2
    UNDERLINE = 4
    STRIKETHROUGH = 8

    @classmethod
    def from_mask(cls, mask: Any) -> "TextFormat":
        """Build a format from a raw mask, ignoring undefined bits."""
        if isinstance(mask, TextFormat):
            return mask
        # bool is an int subclass but never a meaningful mask
        if isinstance(mask, bool) or not isinstance(mask, int):
            return cls.NONE
        return cls(mask & KNOWN_FORMAT_BITS)


KNOWN_FORMAT_BITS = 0b1111


class NodeKind(str, Enum):
    """Kinds of nodes in the rendered output tree."""

    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    QUOTE = "quote"
    CODE = "code"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    ERROR = "error"
    # Flattened children of an unrecognized node; spliced into the parent
    # during assembly and never present in a finished tree.
    FRAGMENT = "fragment"


LIST_KINDS = frozenset({NodeKind.ORDERED_LIST, NodeKind.UNORDERED_LIST})
INLINE_KINDS = frozenset({
    NodeKind.TEXT,
    NodeKind.BOLD,
    NodeKind.ITALIC,
    NodeKind.UNDERLINE,
    NodeKind.STRIKETHROUGH,
})


# =============================================================================
# Input nodes
# =============================================================================

@dataclass(frozen=True)
class TextNode:
    """A leaf run of text.

    Attributes:
        text: The literal text content
        format: Combined inline format flags
    """

    text: str = ""
    format: TextFormat = TextFormat.NONE


@dataclass(frozen=True)
class ParagraphNode:
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class HeadingNode:
    """A heading block; ``level`` is 1 for an ``h1`` tag and 2 otherwise."""

    level: int = 2
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ListNode:
    """A list block; ``ordered`` is captured once from ``listType``."""

    ordered: bool = False
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ListItemNode:
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class QuoteNode:
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class CodeNode:
    children: tuple[Any, ...] = ()


@dataclass(frozen=True)
class UnknownNode:
    """A node whose ``type`` is not recognized.

    Attributes:
        type: The raw type discriminator, as a string
        children: Raw child nodes to be rendered without wrapping markup
    """

    type: str = ""
    children: tuple[Any, ...] = ()


Node = Union[
    TextNode,
    ParagraphNode,
    HeadingNode,
    ListNode,
    ListItemNode,
    QuoteNode,
    CodeNode,
    UnknownNode,
]

# Block kinds whose only attribute is their children
_PLAIN_CONTAINERS: dict[str, type] = {
    "paragraph": ParagraphNode,
    "listitem": ListItemNode,
    "quote": QuoteNode,
    "code": CodeNode,
}


def children_of(raw: Mapping) -> tuple[Any, ...]:
    """Return a node's raw children, or an empty tuple if absent or invalid."""
    children = raw.get("children")
    if isinstance(children, Sequence) and not isinstance(children, (str, bytes)):
        return tuple(children)
    return ()


def node_from_dict(raw: Any) -> Node:
    """Build a typed node from one raw node object.

    Only the node itself is typed; its children stay raw until the
    renderer reaches them, so a malformed child affects nothing else.

    Args:
        raw: A decoded JSON object describing a node

    Returns:
        The typed node

    Raises:
        InvalidNodeError: If ``raw`` is not a node object
    """
    if not isinstance(raw, Mapping):
        raise InvalidNodeError(
            f"expected a node object, got {type(raw).__name__}"
        )

    node_type = raw.get("type")
    if not isinstance(node_type, str):
        return UnknownNode(type=repr(node_type), children=children_of(raw))

    if node_type == "text":
        text = raw.get("text")
        return TextNode(
            text=text if isinstance(text, str) else "",
            format=TextFormat.from_mask(raw.get("format", 0)),
        )

    if node_type == "heading":
        return HeadingNode(
            level=1 if raw.get("tag") == "h1" else 2,
            children=children_of(raw),
        )

    if node_type == "list":
        return ListNode(
            ordered=raw.get("listType") == "number",
            children=children_of(raw),
        )

    container = _PLAIN_CONTAINERS.get(node_type)
    if container is not None:
        return container(children=children_of(raw))

    return UnknownNode(type=node_type, children=children_of(raw))


@dataclass(frozen=True)
class DocumentRoot:
    """The parsed top-level container.

    Attributes:
        children: Raw top-level nodes, in rendering order
    """

    children: tuple[Any, ...] = ()


# =============================================================================
# Rendered output
# =============================================================================

@dataclass(frozen=True)
class RenderedNode:
    """One node of the rendered output tree.

    Attributes:
        kind: What this node renders as
        key: Stable identity derived from sibling positions
        text: Literal text (text and error nodes only)
        level: Heading level (heading nodes only)
        children: Rendered children, in order
    """

    kind: NodeKind
    key: str = ""
    text: str = ""
    level: Optional[int] = None
    children: tuple["RenderedNode", ...] = ()

    @property
    def plain_text(self) -> str:
        """Get the text content without any markup."""
        if self.kind in (NodeKind.TEXT, NodeKind.ERROR):
            return self.text
        return "".join(child.plain_text for child in self.children)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain JSON-compatible data."""
        data: dict[str, Any] = {"kind": self.kind.value, "key": self.key}
        if self.kind in (NodeKind.TEXT, NodeKind.ERROR):
            data["text"] = self.text
        if self.level is not None:
            data["level"] = self.level
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class RenderedDocument:
    """Result of rendering one document.

    Attributes:
        children: Rendered top-level blocks
        error: The document-fatal error, if rendering fell back
        diagnostics: Problems recorded (and recovered from) while rendering
    """

    children: list[RenderedNode] = field(default_factory=list)
    error: Optional[LexicalRenderError] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check whether the document rendered without a fatal error."""
        return self.error is None

    @property
    def plain_text(self) -> str:
        """Get all text content without markup."""
        return "\n\n".join(block.plain_text for block in self.children)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "children": [child.to_dict() for child in self.children],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
