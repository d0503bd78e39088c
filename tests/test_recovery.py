"""Tests for the error recovery policy."""

import pytest

from lexical_render.core.context import RenderContext
from lexical_render.core.recovery import NODE_PLACEHOLDER_TEXT, ErrorRecoveryPolicy
from lexical_render.diagnostics import CollectingSink, Severity
from lexical_render.exceptions import (
    InvalidNodeError,
    MalformedInputError,
    NodeLimitError,
    ParseError,
)
from lexical_render.formatting.ir import DocumentRoot, NodeKind, RenderedNode


@pytest.fixture
def context() -> RenderContext:
    return RenderContext(max_depth=8, max_nodes=100)


class TestGuardParse:
    """Tests for document-fatal parse handling."""

    def test_success_passes_root_through(self, sink, context):
        policy = ErrorRecoveryPolicy(sink=sink)
        root, error = policy.guard_parse(lambda c: DocumentRoot(), "{}", context)

        assert root == DocumentRoot()
        assert error is None
        assert sink.diagnostics == []

    def test_parse_error_reported_once(self, sink, context):
        def parse(content):
            raise MalformedInputError("invalid JSON: bad")

        policy = ErrorRecoveryPolicy(sink=sink)
        root, error = policy.guard_parse(parse, "x", context)

        assert root is None
        assert isinstance(error, MalformedInputError)
        assert len(sink.diagnostics) == 1
        assert sink.diagnostics[0].code == "malformed"
        assert sink.diagnostics[0].severity is Severity.ERROR

    def test_unexpected_error_becomes_parse_error(self, sink, context):
        def parse(content):
            raise TypeError("boom")

        _, error = ErrorRecoveryPolicy(sink=sink).guard_parse(parse, "x", context)

        assert type(error) is ParseError
        assert isinstance(error.__cause__, TypeError)


class TestFallback:
    """Tests for the document-fatal fallback output."""

    def test_message_block(self, context):
        policy = ErrorRecoveryPolicy(sink=CollectingSink(), fallback_message="Oops")
        doc = policy.fallback("{bad", MalformedInputError("x"), context)

        assert doc.ok is False
        assert len(doc.children) == 1
        assert doc.children[0].kind is NodeKind.ERROR
        assert doc.children[0].text == "Oops"

    def test_raw_mode_shows_input(self, context):
        policy = ErrorRecoveryPolicy(sink=CollectingSink(), fallback_mode="raw")
        doc = policy.fallback("just words", MalformedInputError("x"), context)

        assert doc.children[0].kind is NodeKind.PARAGRAPH
        assert doc.plain_text == "just words"

    def test_raw_mode_needs_text_input(self, context):
        policy = ErrorRecoveryPolicy(sink=CollectingSink(), fallback_mode="raw")
        doc = policy.fallback({"no": "root"}, MalformedInputError("x"), context)

        assert doc.children[0].kind is NodeKind.ERROR


class TestGuardRender:
    """Tests for the top-level render bracket."""

    def test_escaping_failure_falls_back(self, sink, context):
        def render(root, ctx):
            raise KeyError("oops")

        policy = ErrorRecoveryPolicy(sink=sink)
        doc = policy.guard_render(render, DocumentRoot(), "{}", context)

        assert doc.ok is False
        assert doc.children[0].kind is NodeKind.ERROR
        assert sink.diagnostics[0].code == "render_failed"


class TestGuardNode:
    """Tests for node-local recovery."""

    def test_success(self, sink, context):
        rendered = RenderedNode(kind=NodeKind.TEXT, text="ok")
        policy = ErrorRecoveryPolicy(sink=sink)

        assert policy.guard_node(lambda r, p, c: rendered, {}, (0,), context) is rendered

    def test_render_error_yields_nothing(self, sink, context):
        def render(raw, path, ctx):
            raise InvalidNodeError("expected a node object, got int")

        result = ErrorRecoveryPolicy(sink=sink).guard_node(render, 3, (2, 1), context)

        assert result is None
        assert sink.diagnostics[0].code == "invalid_node"
        assert sink.diagnostics[0].path == (2, 1)
        assert sink.diagnostics[0].severity is Severity.WARNING

    def test_unexpected_error_yields_nothing(self, sink, context):
        def render(raw, path, ctx):
            raise ZeroDivisionError("division by zero")

        result = ErrorRecoveryPolicy(sink=sink).guard_node(render, {}, (0,), context)

        assert result is None
        assert sink.diagnostics[0].code == "render_failed"
        assert "ZeroDivisionError" in sink.diagnostics[0].message

    def test_placeholder(self, sink, context):
        def render(raw, path, ctx):
            raise InvalidNodeError("bad")

        policy = ErrorRecoveryPolicy(sink=sink, placeholders=True)
        result = policy.guard_node(render, 3, (0,), context)

        assert result.kind is NodeKind.ERROR
        assert result.text == NODE_PLACEHOLDER_TEXT

    def test_no_placeholder_for_truncation(self, sink, context):
        def render(raw, path, ctx):
            raise NodeLimitError("too many")

        policy = ErrorRecoveryPolicy(sink=sink, placeholders=True)

        assert policy.guard_node(render, {}, (0,), context) is None

    def test_broken_sink_does_not_propagate(self, context):
        def sink(diagnostic):
            raise RuntimeError("sink down")

        def render(raw, path, ctx):
            raise InvalidNodeError("bad")

        policy = ErrorRecoveryPolicy(sink=sink)

        assert policy.guard_node(render, 3, (0,), context) is None
        assert len(context.diagnostics) == 1
