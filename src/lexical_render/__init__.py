"""Render serialized rich-text editor documents."""

__version__ = "0.1.0"

from lexical_render.core.pipeline import (
    LexicalRenderer,
    excerpt,
    render_document,
    render_html,
    render_markdown,
    render_text,
)
from lexical_render.diagnostics import CollectingSink, Diagnostic, LoggingSink
from lexical_render.exceptions import (
    LexicalRenderError,
    MalformedInputError,
    MissingRootError,
    ParseError,
    RenderError,
)
from lexical_render.formatting.ir import (
    NodeKind,
    RenderedDocument,
    RenderedNode,
    TextFormat,
)

__all__ = [
    "__version__",
    "LexicalRenderer",
    "render_document",
    "render_html",
    "render_markdown",
    "render_text",
    "excerpt",
    "CollectingSink",
    "Diagnostic",
    "LoggingSink",
    "LexicalRenderError",
    "ParseError",
    "MalformedInputError",
    "MissingRootError",
    "RenderError",
    "NodeKind",
    "RenderedDocument",
    "RenderedNode",
    "TextFormat",
]
