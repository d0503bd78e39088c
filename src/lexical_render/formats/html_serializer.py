"""HTML output."""

from html import escape
from typing import Optional

from lexical_render.formats.base import Serializer
from lexical_render.formatting.ir import NodeKind, RenderedDocument, RenderedNode

_TAGS = {
    NodeKind.PARAGRAPH: "p",
    NodeKind.ORDERED_LIST: "ol",
    NodeKind.UNORDERED_LIST: "ul",
    NodeKind.LIST_ITEM: "li",
    NodeKind.QUOTE: "blockquote",
    NodeKind.BOLD: "strong",
    NodeKind.ITALIC: "em",
    NodeKind.UNDERLINE: "u",
    NodeKind.STRIKETHROUGH: "s",
}

ERROR_CLASS = "lexical-error"


class HTMLSerializer(Serializer):
    """Serialize to HTML markup.

    Top-level blocks are separated by newlines. Text is escaped.

    Args:
        container_class: If set, wrap the output in a ``div`` with this class
    """

    def __init__(self, container_class: Optional[str] = None) -> None:
        self.container_class = container_class

    @property
    def name(self) -> str:
        return "html"

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def serialize(self, document: RenderedDocument) -> str:
        blocks: list[str] = []
        for block in document.children:
            if block.kind is NodeKind.ERROR:
                blocks.append(
                    f'<div class="{ERROR_CLASS}">{escape(block.text, quote=False)}</div>'
                )
            else:
                blocks.append(self.render_node(block))

        body = "\n".join(blocks)
        if self.container_class is None:
            return body
        return f'<div class="{escape(self.container_class)}">\n{body}\n</div>'

    def render_node(self, node: RenderedNode) -> str:
        """Render one output node and its children as markup."""
        if node.kind is NodeKind.TEXT:
            return escape(node.text, quote=False)
        if node.kind is NodeKind.ERROR:
            return f'<span class="{ERROR_CLASS}">{escape(node.text, quote=False)}</span>'

        inner = "".join(self.render_node(child) for child in node.children)

        if node.kind is NodeKind.HEADING:
            return f"<h{node.level}>{inner}</h{node.level}>"
        if node.kind is NodeKind.CODE:
            return f"<pre><code>{inner}</code></pre>"

        tag = _TAGS.get(node.kind)
        if tag is None:
            return inner
        return f"<{tag}>{inner}</{tag}>"
