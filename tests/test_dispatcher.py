"""Tests for dispatching nodes by kind."""

import pytest

from lexical_render.core.context import RenderContext
from lexical_render.core.dispatcher import NodeDispatcher
from lexical_render.core.recovery import ErrorRecoveryPolicy
from lexical_render.diagnostics import CollectingSink
from lexical_render.formatting.ir import NodeKind, RenderedNode

from builders import nested, node, text


class TestNodeDispatcher:
    """Tests for the NodeDispatcher class."""

    @pytest.fixture
    def dispatcher(self, sink: CollectingSink) -> NodeDispatcher:
        return NodeDispatcher(recovery=ErrorRecoveryPolicy(sink=sink))

    @pytest.fixture
    def context(self) -> RenderContext:
        return RenderContext(max_depth=64, max_nodes=10_000)

    def render(self, dispatcher, context, raw) -> RenderedNode:
        return dispatcher.render(raw, (0,), context)

    def test_plain_text(self, dispatcher, context):
        result = self.render(dispatcher, context, text("hello"))

        assert result == RenderedNode(kind=NodeKind.TEXT, text="hello")

    def test_formatted_text(self, dispatcher, context):
        result = self.render(dispatcher, context, text("hello", 1))

        assert result.kind is NodeKind.BOLD
        assert result.children[0].text == "hello"

    def test_paragraph_preserves_order(self, dispatcher, context):
        result = self.render(
            dispatcher, context, node("paragraph", text("A"), text("B"), text("C"))
        )

        assert result.kind is NodeKind.PARAGRAPH
        assert [c.text for c in result.children] == ["A", "B", "C"]
        assert [c.key for c in result.children] == ["0", "1", "2"]

    def test_heading_levels(self, dispatcher, context):
        h1 = self.render(dispatcher, context, node("heading", text("a"), tag="h1"))
        h3 = self.render(dispatcher, context, node("heading", text("a"), tag="h3"))

        assert (h1.kind, h1.level) == (NodeKind.HEADING, 1)
        assert (h3.kind, h3.level) == (NodeKind.HEADING, 2)

    def test_lists(self, dispatcher, context):
        items = [node("listitem", text("one")), node("listitem", text("two"))]
        ordered = self.render(dispatcher, context, node("list", *items, listType="number"))
        bullet = self.render(dispatcher, context, node("list", *items, listType="bullet"))

        assert ordered.kind is NodeKind.ORDERED_LIST
        assert bullet.kind is NodeKind.UNORDERED_LIST
        assert [i.kind for i in ordered.children] == [NodeKind.LIST_ITEM] * 2
        assert [i.plain_text for i in ordered.children] == ["one", "two"]

    def test_nested_list_inside_item(self, dispatcher, context):
        inner = node("list", node("listitem", text("child")), listType="bullet")
        outer = node("list", node("listitem", text("parent"), inner), listType="number")
        result = self.render(dispatcher, context, outer)

        item = result.children[0]
        assert item.children[1].kind is NodeKind.UNORDERED_LIST
        assert item.children[1].children[0].plain_text == "child"

    def test_quote(self, dispatcher, context):
        result = self.render(dispatcher, context, node("quote", text("said")))

        assert result.kind is NodeKind.QUOTE
        assert result.plain_text == "said"

    def test_code_with_several_runs(self, dispatcher, context):
        """Code blocks do not assume a single child."""
        result = self.render(
            dispatcher, context, node("code", text("a = 1"), text("\n"), text("b = 2"))
        )

        assert result.kind is NodeKind.CODE
        assert result.plain_text == "a = 1\nb = 2"

    def test_empty_containers(self, dispatcher, context):
        for kind in ("paragraph", "quote", "code", "listitem"):
            result = self.render(dispatcher, context, {"type": kind})
            assert result.children == ()

    def test_unknown_node_flattens_children(self, dispatcher, context, sink):
        result = self.render(
            dispatcher,
            context,
            node("paragraph", node("link", text("A"), text("B"), url="x")),
        )

        assert result.kind is NodeKind.PARAGRAPH
        assert [c.kind for c in result.children] == [NodeKind.TEXT, NodeKind.TEXT]
        assert [c.text for c in result.children] == ["A", "B"]
        assert [c.key for c in result.children] == ["0.0", "0.1"]
        assert [d.code for d in sink.diagnostics] == ["unknown_kind"]

    def test_unknown_node_without_children_renders_nothing(self, dispatcher, context):
        assert self.render(dispatcher, context, {"type": "linebreak"}) is None

    def test_none_child_renders_nothing(self, dispatcher, context, sink):
        result = self.render(dispatcher, context, node("paragraph", None, text("a")))

        assert [c.text for c in result.children] == ["a"]
        assert sink.diagnostics == []

    def test_invalid_child_is_local(self, dispatcher, context, sink):
        """A non-object child is dropped; its siblings still render."""
        result = self.render(
            dispatcher, context, node("paragraph", text("a"), 42, text("c"))
        )

        assert [c.text for c in result.children] == ["a", "c"]
        assert [c.key for c in result.children] == ["0", "2"]
        assert sink.diagnostics[0].code == "invalid_node"
        assert sink.diagnostics[0].path == (0, 1)

    def test_depth_limit_drops_subtree(self, sink):
        dispatcher = NodeDispatcher(recovery=ErrorRecoveryPolicy(sink=sink))
        context = RenderContext(max_depth=3, max_nodes=100)

        within = dispatcher.render(nested(3), (0,), context)
        beyond = dispatcher.render(nested(4), (1,), context)

        assert within.plain_text == "deep"
        assert beyond.plain_text == ""
        assert [d.code for d in sink.diagnostics] == ["depth_limit"]

    def test_node_limit_truncates_once(self, sink):
        dispatcher = NodeDispatcher(recovery=ErrorRecoveryPolicy(sink=sink))
        context = RenderContext(max_depth=10, max_nodes=3)

        result = dispatcher.render(
            node("paragraph", text("a"), text("b"), text("c"), text("d")), (0,), context
        )

        assert [c.text for c in result.children] == ["a", "b"]
        assert [d.code for d in sink.diagnostics] == ["node_limit"]
        assert context.truncated is True

    def test_context_records_diagnostics(self, dispatcher, context):
        dispatcher.render(node("paragraph", "bad"), (0,), context)

        assert [d.code for d in context.diagnostics] == ["invalid_node"]
