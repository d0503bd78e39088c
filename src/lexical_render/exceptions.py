"""Custom exceptions for lexical_render."""


class LexicalRenderError(Exception):
    """Base exception for lexical_render operations."""

    code = "error"


class ParseError(LexicalRenderError):
    """The document could not be turned into a root node sequence."""

    code = "parse_failed"


class MalformedInputError(ParseError):
    """Input text is not valid JSON."""

    code = "malformed"


class MissingRootError(ParseError):
    """Parsed input has no ``root.children`` sequence."""

    code = "missing_root"


class RenderError(LexicalRenderError):
    """Error while rendering a single node."""

    code = "render_failed"


class InvalidNodeError(RenderError):
    """A child entry is not a node object."""

    code = "invalid_node"


class DepthLimitError(RenderError):
    """Node nesting exceeds the configured maximum depth."""

    code = "depth_limit"


class NodeLimitError(RenderError):
    """Document contains more nodes than the configured maximum."""

    code = "node_limit"
