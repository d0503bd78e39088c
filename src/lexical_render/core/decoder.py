"""Decoding of inline format masks into nested style wrappers."""

from dataclasses import replace
from typing import Any

from lexical_render.formatting.ir import NodeKind, RenderedNode, TextFormat

# Flags are applied in this order, each wrapper enclosing the previous
# result: bold is innermost, strikethrough outermost.
FORMAT_ORDER: tuple[tuple[TextFormat, NodeKind], ...] = (
    (TextFormat.BOLD, NodeKind.BOLD),
    (TextFormat.ITALIC, NodeKind.ITALIC),
    (TextFormat.UNDERLINE, NodeKind.UNDERLINE),
    (TextFormat.STRIKETHROUGH, NodeKind.STRIKETHROUGH),
)


class FormatDecoder:
    """Turn a text format bit-mask into wrapper nodes."""

    def decode(self, mask: Any) -> list[NodeKind]:
        """Get the wrapper kinds for a mask, innermost first.

        Args:
            mask: Raw ``format`` value or a ``TextFormat``; undefined bits
                and non-integer values are ignored

        Returns:
            Wrapper kinds in application order
        """
        text_format = TextFormat.from_mask(mask)
        return [kind for flag, kind in FORMAT_ORDER if flag in text_format]

    def wrap(self, mask: Any, content: RenderedNode) -> RenderedNode:
        """Wrap content in one node per set flag.

        Each wrapper has exactly one child, keyed "0".
        """
        wrapped = content
        for kind in self.decode(mask):
            wrapped = RenderedNode(kind=kind, children=(replace(wrapped, key="0"),))
        return wrapped
