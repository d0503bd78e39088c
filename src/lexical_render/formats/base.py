"""Abstract base class for rendered document serializers."""

from abc import ABC, abstractmethod
from pathlib import Path

from lexical_render.formatting.ir import RenderedDocument


class Serializer(ABC):
    """Abstract base class for output serializers.

    Each serializer turns a RenderedDocument into text for one output
    format and can write it to a file.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the format name used on the command line (e.g. 'html')."""
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.html',))."""
        ...

    @abstractmethod
    def serialize(self, document: RenderedDocument) -> str:
        """Convert a rendered document to text.

        Args:
            document: The rendered document

        Returns:
            The serialized output
        """
        ...

    def write(self, document: RenderedDocument, path: Path) -> None:
        """Serialize a document and write it to a file.

        Args:
            document: The rendered document
            path: Path to write the output to
        """
        path.write_text(self.serialize(document), encoding="utf-8")
