"""Output serializers for rendered documents."""

from lexical_render.formats.base import Serializer
from lexical_render.formats.html_serializer import HTMLSerializer
from lexical_render.formats.markdown_serializer import MarkdownSerializer
from lexical_render.formats.text_serializer import TextSerializer

__all__ = [
    "Serializer",
    "HTMLSerializer",
    "MarkdownSerializer",
    "TextSerializer",
    "get_serializer",
]

# Map format names and file extensions to serializers
SERIALIZER_MAP: dict[str, type[Serializer]] = {
    "html": HTMLSerializer,
    ".html": HTMLSerializer,
    ".htm": HTMLSerializer,
    "markdown": MarkdownSerializer,
    "md": MarkdownSerializer,
    ".md": MarkdownSerializer,
    ".markdown": MarkdownSerializer,
    "text": TextSerializer,
    "txt": TextSerializer,
    ".txt": TextSerializer,
}

SUPPORTED_FORMATS = ("html", "markdown", "text")


def get_serializer(name: str) -> type[Serializer]:
    """Get the serializer class for a format name or file extension."""
    key = name.lower()
    if key not in SERIALIZER_MAP:
        raise ValueError(
            f"Unsupported output format: {name}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    return SERIALIZER_MAP[key]
