"""Markdown output."""

import re

from lexical_render.formats.base import Serializer
from lexical_render.formatting.ir import (
    INLINE_KINDS,
    LIST_KINDS,
    NodeKind,
    RenderedDocument,
    RenderedNode,
)

_INLINE_MARKERS = {
    NodeKind.BOLD: ("**", "**"),
    NodeKind.ITALIC: ("*", "*"),
    NodeKind.UNDERLINE: ("<u>", "</u>"),
    NodeKind.STRIKETHROUGH: ("~~", "~~"),
}

_SPECIAL_CHARS_RE = re.compile(r"([\\`*_~\[\]<>])")
# Characters that would open a heading, list or setext underline at line start
_LINE_START_RE = re.compile(r"^([ \t]*)([#+=-]|\d+[.)](?=[ \t]|$))", re.MULTILINE)
_BACKTICK_RUN_RE = re.compile(r"`+")


def escape_markdown(text: str) -> str:
    """Escape text so Markdown renders it literally."""
    text = _SPECIAL_CHARS_RE.sub(r"\\\1", text)
    return _LINE_START_RE.sub(
        lambda m: f"{m.group(1)}{m.group(2)[:-1]}\\{m.group(2)[-1]}", text
    )


def _fence(text: str, minimum: int) -> str:
    """Backtick fence longer than any backtick run inside text."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    return "`" * max(minimum, longest + 1)


class MarkdownSerializer(Serializer):
    """Serialize to Markdown.

    Blocks are separated by blank lines. Underline has no Markdown
    syntax and is written as an inline ``<u>`` tag.
    """

    @property
    def name(self) -> str:
        return "markdown"

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".md", ".markdown")

    def serialize(self, document: RenderedDocument) -> str:
        blocks: list[str] = []
        for node in document.children:
            block = self._serialize_block(node)
            if block:
                blocks.append(block)
        return "\n\n".join(blocks)

    def _serialize_block(self, node: RenderedNode) -> str:
        if node.kind is NodeKind.HEADING:
            return f"{'#' * (node.level or 2)} {self._inline_children(node)}"

        if node.kind in LIST_KINDS:
            return "\n".join(self._serialize_list(node, indent=""))

        if node.kind is NodeKind.QUOTE:
            lines = self._inline_children(node).split("\n")
            return "\n".join(f"> {line}" if line else ">" for line in lines)

        if node.kind is NodeKind.CODE:
            fence = _fence(node.plain_text, 3)
            return f"{fence}\n{node.plain_text}\n{fence}"

        if node.kind is NodeKind.ERROR:
            return escape_markdown(node.text)

        # Paragraphs, list items outside a list, and bare inline runs
        return self._inline(node)

    def _serialize_list(self, node: RenderedNode, indent: str) -> list[str]:
        lines: list[str] = []
        ordered = node.kind is NodeKind.ORDERED_LIST

        for number, item in enumerate(node.children, start=1):
            marker = f"{number}. " if ordered else "- "
            if item.kind in LIST_KINDS:
                lines.extend(self._serialize_list(item, indent + "  "))
                continue

            nested = [child for child in item.children if child.kind in LIST_KINDS]
            text = "".join(
                self._inline(child)
                for child in item.children
                if child.kind not in LIST_KINDS
            ) if nested else self._inline(item)

            if text or not nested:
                lines.append(f"{indent}{marker}{text}")
            for sublist in nested:
                lines.extend(self._serialize_list(sublist, indent + " " * len(marker)))

        return lines

    def _inline_children(self, node: RenderedNode) -> str:
        return "".join(self._inline(child) for child in node.children)

    def _inline(self, node: RenderedNode) -> str:
        if node.kind is NodeKind.TEXT or node.kind is NodeKind.ERROR:
            return escape_markdown(node.text)

        inner = self._inline_children(node)
        if node.kind in INLINE_KINDS:
            opening, closing = _INLINE_MARKERS[node.kind]
            return f"{opening}{inner}{closing}" if inner else ""
        if node.kind is NodeKind.CODE:
            code = node.plain_text
            if code.startswith("`") or code.endswith("`"):
                code = f" {code} "
            fence = _fence(code, 1)
            return f"{fence}{code}{fence}"
        # Block nested inside a block: keep its content only
        return inner
