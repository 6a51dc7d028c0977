from __future__ import annotations

import html
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class RawHtmlNode:
    """Pre-escaped markup, e.g. highlighter output. Emitted as-is."""

    html: str


@dataclass(frozen=True)
class ElementNode:
    tag: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[Node, ...] = ()

    def attr(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def has_class(self, name: str) -> bool:
        classes = self.attr("class")
        return classes is not None and name in classes.split()


Node = TextNode | RawHtmlNode | ElementNode


def element(tag: str, *children: Node, **attrs: str) -> ElementNode:
    """Build an element; `class_` and `data_*` keyword names map to `class` and `data-*`."""
    return ElementNode(
        tag=tag,
        attrs=tuple((_attr_name(key), value) for key, value in attrs.items()),
        children=children,
    )


def _attr_name(key: str) -> str:
    return key.rstrip("_").replace("_", "-")


def to_html(nodes: Node | Iterable[Node]) -> str:
    if isinstance(nodes, TextNode | RawHtmlNode | ElementNode):
        nodes = (nodes,)
    out: list[str] = []
    for node in nodes:
        _write_node(node, out)
    return "".join(out)


def _write_node(node: Node, out: list[str]) -> None:
    if isinstance(node, TextNode):
        out.append(html.escape(node.text, quote=False))
        return
    if isinstance(node, RawHtmlNode):
        out.append(node.html)
        return

    attrs = "".join(f' {key}="{html.escape(value, quote=True)}"' for key, value in node.attrs)
    out.append(f"<{node.tag}{attrs}>")
    for child in node.children:
        _write_node(child, out)
    out.append(f"</{node.tag}>")


def iter_elements(nodes: Node | Iterable[Node]) -> Iterator[ElementNode]:
    """Yield every element depth-first, in document order."""
    if isinstance(nodes, TextNode | RawHtmlNode | ElementNode):
        nodes = (nodes,)
    for node in nodes:
        if isinstance(node, ElementNode):
            yield node
            yield from iter_elements(node.children)


def text_content(nodes: Node | Iterable[Node]) -> str:
    if isinstance(nodes, TextNode | RawHtmlNode | ElementNode):
        nodes = (nodes,)
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, ElementNode):
            parts.append(text_content(node.children))
    return "".join(parts)
