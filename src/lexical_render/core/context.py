"""Per-invocation rendering state."""

from dataclasses import dataclass, field

from lexical_render.diagnostics import Diagnostic


@dataclass
class RenderContext:
    """Mutable state for a single render call.

    A fresh context is created for every document, so concurrent renders
    never share anything.

    Attributes:
        max_depth: Deepest nesting level that is still rendered
        max_nodes: Number of nodes rendered before output is truncated
        visited: Nodes rendered so far
        truncated: Whether the node limit has been hit
        diagnostics: Problems recorded during this call
    """

    max_depth: int
    max_nodes: int
    visited: int = 0
    truncated: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)
