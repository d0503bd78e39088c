"""Plain text output."""

from lexical_render.formats.base import Serializer
from lexical_render.formatting.ir import LIST_KINDS, RenderedDocument, RenderedNode


class TextSerializer(Serializer):
    """Serialize to plain text.

    Blocks are separated by blank lines and list items are written one
    per line. All formatting is dropped.
    """

    @property
    def name(self) -> str:
        return "text"

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def serialize(self, document: RenderedDocument) -> str:
        blocks = ["\n".join(self._lines(node)) for node in document.children]
        return "\n\n".join(block for block in blocks if block)

    def _lines(self, node: RenderedNode) -> list[str]:
        if node.kind not in LIST_KINDS:
            return [node.plain_text]

        lines: list[str] = []
        for item in node.children:
            if item.kind in LIST_KINDS:
                lines.extend(self._lines(item))
                continue

            nested = [child for child in item.children if child.kind in LIST_KINDS]
            if not nested:
                lines.append(item.plain_text)
                continue

            text = "".join(
                child.plain_text for child in item.children if child.kind not in LIST_KINDS
            )
            if text:
                lines.append(text)
            for sublist in nested:
                lines.extend(self._lines(sublist))
        return lines
