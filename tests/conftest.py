"""Pytest fixtures for lexical_render tests."""

import json

import pytest

from lexical_render import config
from lexical_render.diagnostics import CollectingSink

from builders import document, node, text


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Give every test fresh settings unaffected by the environment."""
    for name in (
        "LEXICAL_RENDER_MAX_DEPTH",
        "LEXICAL_RENDER_MAX_NODES",
        "LEXICAL_RENDER_FALLBACK_MESSAGE",
        "LEXICAL_RENDER_FALLBACK_MODE",
        "LEXICAL_RENDER_NODE_PLACEHOLDERS",
        "LEXICAL_RENDER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_settings", None)


@pytest.fixture
def sink() -> CollectingSink:
    """Collect diagnostics instead of logging them."""
    return CollectingSink()


@pytest.fixture
def sample_document() -> dict:
    """A blog post using every known node kind."""
    return document(
        node("heading", text("Release notes"), tag="h1"),
        node(
            "paragraph",
            text("Version "),
            text("2.0", 1),
            text(" is "),
            text("out", 3),
            text("."),
        ),
        node(
            "list",
            node("listitem", text("Faster startup")),
            node("listitem", text("Fewer bugs")),
            listType="number",
        ),
        node("quote", text("Ship it.")),
        node("code", text("pip install lexical-render")),
    )


@pytest.fixture
def sample_json(sample_document: dict) -> str:
    """The sample document serialized as JSON text."""
    return json.dumps(sample_document)
