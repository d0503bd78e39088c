"""Error recovery around parsing and rendering.

Parse failures are document-fatal: there is nothing to traverse, so the
whole invocation yields a single fallback block. Render failures are
node-local: the failing node yields nothing (or a placeholder) and its
siblings and ancestors render normally.
"""

import logging
from typing import Any, Callable, Optional

from lexical_render.core.context import RenderContext
from lexical_render.diagnostics import Diagnostic, DiagnosticSink, LoggingSink, Severity
from lexical_render.exceptions import (
    LexicalRenderError,
    NodeLimitError,
    ParseError,
    RenderError,
)
from lexical_render.formatting.ir import (
    DocumentRoot,
    NodeKind,
    RenderedDocument,
    RenderedNode,
)

logger = logging.getLogger(__name__)

NODE_PLACEHOLDER_TEXT = "[unrenderable content]"

NodePath = tuple[int, ...]


class ErrorRecoveryPolicy:
    """Convert failures into diagnostics and fallback output.

    Args:
        sink: Receives every diagnostic (defaults to a LoggingSink)
        fallback_message: Text of the document-fatal fallback block
        fallback_mode: "message" for an error block, "raw" to show the
            unparsed input as a paragraph
        placeholders: Emit an error node in place of a failed node
    """

    def __init__(
        self,
        sink: Optional[DiagnosticSink] = None,
        fallback_message: str = "Error loading content",
        fallback_mode: str = "message",
        placeholders: bool = False,
    ) -> None:
        self.sink = sink or LoggingSink()
        self.fallback_message = fallback_message
        self.fallback_mode = fallback_mode
        self.placeholders = placeholders

    def record(self, context: RenderContext, diagnostic: Diagnostic) -> None:
        """Store a diagnostic on the context and pass it to the sink."""
        context.diagnostics.append(diagnostic)
        try:
            self.sink(diagnostic)
        except Exception:
            # A broken sink must not turn a recovered problem into a crash
            logger.exception("Diagnostic sink failed for %s", diagnostic.code)

    def note_unknown(self, context: RenderContext, node_type: str, path: NodePath) -> None:
        self.record(
            context,
            Diagnostic(
                code="unknown_kind",
                message=f"unrecognized node type {node_type!r}, rendering children only",
                severity=Severity.INFO,
                path=path,
            ),
        )

    # -------------------------------------------------------------------------
    # Document level
    # -------------------------------------------------------------------------

    def guard_parse(
        self,
        parse: Callable[[Any], DocumentRoot],
        content: Any,
        context: RenderContext,
    ) -> tuple[Optional[DocumentRoot], Optional[ParseError]]:
        """Run the parser, reporting a failure once.

        Returns:
            (root, None) on success, (None, error) on failure
        """
        try:
            return parse(content), None
        except ParseError as e:
            error = e
        except Exception as e:
            error = ParseError(f"{type(e).__name__}: {e}")
            error.__cause__ = e

        self.record(
            context,
            Diagnostic(code=error.code, message=str(error), severity=Severity.ERROR),
        )
        return None, error

    def guard_render(
        self,
        render: Callable[[DocumentRoot, RenderContext], RenderedDocument],
        root: DocumentRoot,
        content: Any,
        context: RenderContext,
    ) -> RenderedDocument:
        """Run the top-level render; an escaping failure becomes the fallback."""
        try:
            return render(root, context)
        except Exception as e:
            error = RenderError(f"{type(e).__name__}: {e}")
            error.__cause__ = e
            self.record(
                context,
                Diagnostic(code=error.code, message=str(error), severity=Severity.ERROR),
            )
            return self.fallback(content, error, context)

    def fallback(
        self,
        content: Any,
        error: LexicalRenderError,
        context: RenderContext,
    ) -> RenderedDocument:
        """Build the single-block output of a document-fatal failure."""
        if self.fallback_mode == "raw" and isinstance(content, str):
            block = RenderedNode(
                kind=NodeKind.PARAGRAPH,
                key="0",
                children=(RenderedNode(kind=NodeKind.TEXT, key="0", text=content),),
            )
        else:
            block = RenderedNode(kind=NodeKind.ERROR, key="0", text=self.fallback_message)
        return RenderedDocument(
            children=[block],
            error=error,
            diagnostics=context.diagnostics,
        )

    # -------------------------------------------------------------------------
    # Node level
    # -------------------------------------------------------------------------

    def guard_node(
        self,
        render: Callable[[Any, NodePath, RenderContext], Optional[RenderedNode]],
        raw: Any,
        path: NodePath,
        context: RenderContext,
    ) -> Optional[RenderedNode]:
        """Render one node, confining any failure to that node."""
        try:
            return render(raw, path, context)
        except RenderError as e:
            diagnostic = Diagnostic(code=e.code, message=str(e), path=path)
        except Exception as e:
            # Includes RecursionError from pathological input
            diagnostic = Diagnostic(
                code=RenderError.code,
                message=f"{type(e).__name__}: {e}",
                path=path,
            )

        self.record(context, diagnostic)
        if self.placeholders and diagnostic.code != NodeLimitError.code:
            return RenderedNode(kind=NodeKind.ERROR, text=NODE_PLACEHOLDER_TEXT)
        return None
