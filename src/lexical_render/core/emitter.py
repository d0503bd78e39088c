"""Assembly of rendered children into ordered containers."""

from dataclasses import replace
from typing import Optional, Sequence

from lexical_render.formatting.ir import NodeKind, RenderedNode


class RenderEmitter:
    """Assemble rendered children, assigning positional keys.

    A child's key is its ordinal among its siblings in the input. Children
    flattened out of an unrecognized node keep that node's ordinal as a
    prefix ("2.0", "2.1"), so the keys of later siblings never shift.
    """

    def assemble(
        self, outputs: Sequence[Optional[RenderedNode]]
    ) -> tuple[RenderedNode, ...]:
        """Key and concatenate rendered children in input order.

        Args:
            outputs: One entry per input child; None for children that
                rendered to nothing

        Returns:
            The keyed children, with fragments spliced in place
        """
        assembled: list[RenderedNode] = []
        for index, output in enumerate(outputs):
            if output is None:
                continue
            if output.kind is NodeKind.FRAGMENT:
                for child in output.children:
                    assembled.append(replace(child, key=f"{index}.{child.key}"))
            else:
                assembled.append(replace(output, key=str(index)))
        return tuple(assembled)

    def container(
        self,
        kind: NodeKind,
        outputs: Sequence[Optional[RenderedNode]],
        level: Optional[int] = None,
    ) -> RenderedNode:
        """Build a block container holding the assembled children."""
        return RenderedNode(kind=kind, level=level, children=self.assemble(outputs))

    def list_container(
        self, ordered: bool, outputs: Sequence[Optional[RenderedNode]]
    ) -> RenderedNode:
        kind = NodeKind.ORDERED_LIST if ordered else NodeKind.UNORDERED_LIST
        return self.container(kind, outputs)

    def fragment(
        self, outputs: Sequence[Optional[RenderedNode]]
    ) -> Optional[RenderedNode]:
        """Group children without wrapping markup; None if nothing rendered."""
        children = self.assemble(outputs)
        if not children:
            return None
        return RenderedNode(kind=NodeKind.FRAGMENT, children=children)
