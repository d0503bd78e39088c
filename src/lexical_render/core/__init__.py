"""Core parse-and-render pipeline for lexical_render."""

from lexical_render.core.decoder import FormatDecoder
from lexical_render.core.dispatcher import NodeDispatcher
from lexical_render.core.emitter import RenderEmitter
from lexical_render.core.parser import DocumentParser
from lexical_render.core.pipeline import (
    LexicalRenderer,
    excerpt,
    render_document,
    render_html,
    render_markdown,
    render_text,
)
from lexical_render.core.recovery import ErrorRecoveryPolicy

__all__ = [
    "FormatDecoder",
    "NodeDispatcher",
    "RenderEmitter",
    "DocumentParser",
    "ErrorRecoveryPolicy",
    "LexicalRenderer",
    "render_document",
    "excerpt",
    "render_html",
    "render_markdown",
    "render_text",
]
