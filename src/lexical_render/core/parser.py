"""Validation of raw editor content into a document root."""

import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from lexical_render.exceptions import MalformedInputError, MissingRootError
from lexical_render.formatting.ir import DocumentRoot


class _RootEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    children: list[Any]

    @field_validator("children", mode="before")
    @classmethod
    def _require_sequence(cls, value: Any) -> Any:
        # Sets and mappings have no reliable order
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise ValueError("children must be an ordered sequence of nodes")
        return value


class _DocumentEnvelope(BaseModel):
    """The ``{"root": {"children": [...]}}`` shape every document must have."""

    model_config = ConfigDict(extra="ignore")

    root: _RootEnvelope


class DocumentParser:
    """Turn a JSON string or decoded structure into a DocumentRoot.

    Text is decoded first and then validated exactly like an already
    decoded mapping, so both forms of a document behave the same. Only the
    envelope is checked here. Individual nodes are validated by the
    dispatcher as it reaches them, so one malformed subtree does not
    invalidate the whole document.
    """

    def parse(self, content: Any) -> DocumentRoot:
        """Parse editor content.

        Args:
            content: JSON text (str or bytes) or an already decoded mapping

        Returns:
            DocumentRoot holding the raw top-level nodes

        Raises:
            MalformedInputError: If text input is not valid JSON
            MissingRootError: If there is no ``root.children`` sequence
        """
        if isinstance(content, (str, bytes, bytearray)):
            content = self._decode(content)

        try:
            envelope = _DocumentEnvelope.model_validate(content)
        except ValidationError as e:
            raise self._classify(e) from e

        return DocumentRoot(children=tuple(envelope.root.children))

    @staticmethod
    def _decode(text: Any) -> Any:
        """Decode JSON text, reporting any failure as malformed input."""
        try:
            return json.loads(text)
        except ValueError as e:
            raise MalformedInputError(f"invalid JSON: {e}") from e
        except RecursionError as e:
            # Only reachable far beyond the renderer's own depth limit
            raise MalformedInputError("invalid JSON: nesting too deep to decode") from e

    @staticmethod
    def _classify(error: ValidationError) -> Exception:
        """Map a validation failure onto the missing-root error."""
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "document"
        return MissingRootError(f"missing root: {location}: {first['msg']}")
