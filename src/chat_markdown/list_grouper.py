from __future__ import annotations

from dataclasses import dataclass, field

from chat_markdown.html_nodes import ElementNode, Node

_UL_CLASS = "md-list md-list--bullet"
_OL_CLASS = "md-list md-list--numbered"


@dataclass
class RenderGroup:
    ordered: bool
    items: list[Node] = field(default_factory=list)

    def to_node(self) -> ElementNode:
        tag = "ol" if self.ordered else "ul"
        css_class = _OL_CLASS if self.ordered else _UL_CLASS
        return ElementNode(tag=tag, attrs=(("class", css_class),), children=tuple(self.items))


class ListGrouper:
    """Merge consecutive rendered list items of the same kind into one list.

    The open group is flushed when an item of the other kind arrives, when
    the caller reaches a non-list block, or at the end of input.
    """

    def __init__(self) -> None:
        self._group: RenderGroup | None = None

    @property
    def is_open(self) -> bool:
        return self._group is not None

    def add(self, item: Node, *, ordered: bool) -> ElementNode | None:
        """Append an item; returns the list that had to be closed first, if any."""
        closed: ElementNode | None = None
        if self._group is None or self._group.ordered != ordered:
            closed = self.flush()
            self._group = RenderGroup(ordered=ordered)
        self._group.items.append(item)
        return closed

    def flush(self) -> ElementNode | None:
        if self._group is None:
            return None
        node = self._group.to_node()
        self._group = None
        return node
