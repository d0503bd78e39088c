"""Main rendering orchestrator."""

from collections.abc import Mapping
from typing import Any, Optional

from lexical_render.config import (
    FALLBACK_MODES,
    MAX_DEPTH_CEILING,
    Settings,
    get_settings,
)
from lexical_render.core.context import RenderContext
from lexical_render.core.decoder import FormatDecoder
from lexical_render.core.dispatcher import NodeDispatcher
from lexical_render.core.emitter import RenderEmitter
from lexical_render.core.parser import DocumentParser
from lexical_render.core.recovery import ErrorRecoveryPolicy
from lexical_render.diagnostics import DiagnosticSink
from lexical_render.exceptions import ParseError
from lexical_render.formats import HTMLSerializer, MarkdownSerializer, TextSerializer
from lexical_render.formatting.ir import DocumentRoot, RenderedDocument, children_of


class LexicalRenderer:
    """Orchestrates the read path for one or more documents.

    Pipeline:
    1. Parse the input into a DocumentRoot (document-fatal on failure)
    2. Dispatch every node by kind, recovering per node
    3. Assemble the keyed output tree

    The renderer holds no per-document state and can be shared between
    threads.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sink: Optional[DiagnosticSink] = None,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
        placeholders: Optional[bool] = None,
        fallback_message: Optional[str] = None,
        fallback_mode: Optional[str] = None,
    ) -> None:
        """Initialize the renderer.

        Explicit arguments override the corresponding settings.

        Args:
            settings: Configuration (defaults to the global settings)
            sink: Diagnostic sink (defaults to logging)
            max_depth: Deepest nesting level that is rendered
            max_nodes: Maximum number of nodes rendered per document
            placeholders: Emit error nodes in place of failed nodes
            fallback_message: Text shown when a document cannot be parsed
            fallback_mode: "message" or "raw"
        """
        settings = settings or get_settings()
        self.max_depth = max_depth if max_depth is not None else settings.max_depth
        self.max_nodes = max_nodes if max_nodes is not None else settings.max_nodes

        if not 1 <= self.max_depth <= MAX_DEPTH_CEILING:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_CEILING}, got {self.max_depth}"
            )
        if self.max_nodes < 1:
            raise ValueError(f"max_nodes must be at least 1, got {self.max_nodes}")

        fallback_mode = fallback_mode or settings.fallback_mode
        if fallback_mode not in FALLBACK_MODES:
            raise ValueError(
                f"fallback_mode must be one of {', '.join(FALLBACK_MODES)}, got {fallback_mode!r}"
            )

        self.parser = DocumentParser()
        self.emitter = RenderEmitter()
        self.recovery = ErrorRecoveryPolicy(
            sink=sink,
            fallback_message=(
                fallback_message if fallback_message is not None
                else settings.fallback_message
            ),
            fallback_mode=fallback_mode,
            placeholders=(
                placeholders if placeholders is not None
                else settings.node_placeholders
            ),
        )
        self.dispatcher = NodeDispatcher(
            decoder=FormatDecoder(),
            emitter=self.emitter,
            recovery=self.recovery,
        )

    def render(self, content: Any) -> RenderedDocument:
        """Render editor content. Never raises.

        Args:
            content: JSON text or an already decoded mapping

        Returns:
            The rendered document; on a document-fatal error it holds a
            single fallback block and ``error`` is set
        """
        context = RenderContext(max_depth=self.max_depth, max_nodes=self.max_nodes)
        root, error = self.recovery.guard_parse(self.parser.parse, content, context)
        if error is not None:
            return self.recovery.fallback(content, error, context)
        return self.recovery.guard_render(self._render_root, root, content, context)

    def _render_root(self, root: DocumentRoot, context: RenderContext) -> RenderedDocument:
        outputs = self.dispatcher.render_children(root.children, (), context)
        return RenderedDocument(
            children=list(self.emitter.assemble(outputs)),
            diagnostics=context.diagnostics,
        )

    def excerpt(self, content: Any, separator: str = " ") -> str:
        """Build a one-line summary of a document. Never raises.

        Takes the text of the first child of each top-level node, skipping
        empty ones. Unparseable text input is returned unchanged.

        Args:
            content: JSON text or an already decoded mapping
            separator: Placed between the collected texts

        Returns:
            The excerpt text
        """
        try:
            root = self.parser.parse(content)
        except ParseError:
            return content if isinstance(content, str) else ""

        parts: list[str] = []
        for node in root.children:
            if not isinstance(node, Mapping):
                continue
            children = children_of(node)
            if not children or not isinstance(children[0], Mapping):
                continue
            text = children[0].get("text")
            if isinstance(text, str) and text:
                parts.append(text)
        return separator.join(parts)


def render_document(content: Any, **kwargs: Any) -> RenderedDocument:
    """Render content with a one-off LexicalRenderer."""
    return LexicalRenderer(**kwargs).render(content)


def excerpt(content: Any, separator: str = " ", **kwargs: Any) -> str:
    """Summarize content with a one-off LexicalRenderer."""
    return LexicalRenderer(**kwargs).excerpt(content, separator=separator)


def render_html(content: Any, container_class: Optional[str] = None, **kwargs: Any) -> str:
    """Render content straight to HTML markup."""
    return HTMLSerializer(container_class=container_class).serialize(
        render_document(content, **kwargs)
    )


def render_markdown(content: Any, **kwargs: Any) -> str:
    """Render content straight to Markdown."""
    return MarkdownSerializer().serialize(render_document(content, **kwargs))


def render_text(content: Any, **kwargs: Any) -> str:
    """Render content straight to plain text."""
    return TextSerializer().serialize(render_document(content, **kwargs))
