from __future__ import annotations

from collections.abc import Iterable, Sequence

from chat_markdown.block_parser import parse_blocks
from chat_markdown.domain.blocks import (
    Block,
    BoldSpan,
    CodeBlock,
    CodeSpan,
    Heading,
    InlineSegment,
    ItalicSpan,
    ListItem,
    Paragraph,
    TextSpan,
)
from chat_markdown.highlighter import highlight
from chat_markdown.html_nodes import ElementNode, Node, RawHtmlNode, TextNode, element, iter_elements
from chat_markdown.inline_parser import parse_inline
from chat_markdown.list_grouper import ListGrouper
from chat_markdown.renderer_config import RendererConfig

COPY_CODE_ACTION = "copy-code"


def render_markdown(content: str, config: RendererConfig | None = None) -> ElementNode:
    return render_blocks(parse_blocks(content), config)


def render_blocks(blocks: Sequence[Block], config: RendererConfig | None = None) -> ElementNode:
    """Render parsed blocks into a `<div class="md-content">` node tree."""
    config = config or RendererConfig()
    grouper = ListGrouper()
    out: list[Node] = []

    for block in blocks:
        if isinstance(block, ListItem):
            closed = grouper.add(element("li", *render_inline(parse_inline(block.text))), ordered=block.ordered)
            if closed is not None:
                out.append(closed)
            continue

        if (closed := grouper.flush()) is not None:
            out.append(closed)
        out.append(_render_block(block, config))

    if (closed := grouper.flush()) is not None:
        out.append(closed)
    return element("div", *out, class_="md-content")


def _render_block(block: Block, config: RendererConfig) -> Node:
    match block:
        case Heading(text=text, level=level):
            size = f"{config.heading_size_rem(level):g}rem"
            return element(f"h{level}", TextNode(text), class_="md-heading", style=f"font-size: {size}")
        case CodeBlock():
            return render_code_block(block, config)
        case Paragraph(text=text):
            return element("p", *render_inline(parse_inline(text)), class_="md-paragraph")
        case _:
            raise TypeError(f"Unsupported block: {block!r}")


def render_code_block(block: CodeBlock, config: RendererConfig) -> ElementNode:
    body: Node = RawHtmlNode(highlight(block.text, block.language)) if config.highlight_code else TextNode(block.text)
    header = element(
        "div",
        element("span", TextNode(block.language), class_="md-code-lang"),
        element(
            "button",
            TextNode(config.copy_label),
            type="button",
            class_="md-copy",
            data_action=COPY_CODE_ACTION,
            data_copy_text=block.text,
        ),
        class_="md-code-header",
    )
    code = element("code", body, class_=f"language-{block.language}")
    return element("div", header, element("pre", code, class_="md-code-body"), class_="md-code-block")


def render_inline(segments: Iterable[InlineSegment]) -> tuple[Node, ...]:
    nodes: list[Node] = []
    for segment in segments:
        match segment:
            case BoldSpan(children=children):
                nodes.append(element("strong", *render_inline(children)))
            case ItalicSpan(children=children):
                nodes.append(element("em", *render_inline(children)))
            case CodeSpan(content=content):
                nodes.append(element("code", TextNode(content), class_="md-inline-code"))
            case TextSpan(content=content):
                nodes.append(TextNode(content))
    return tuple(nodes)


def copy_payloads(root: Node, *, action: str = COPY_CODE_ACTION) -> list[str]:
    """Literal text each copy button hands to the clipboard, in document order."""
    payloads: list[str] = []
    for node in iter_elements(root):
        if node.attr("data-action") != action:
            continue
        text = node.attr("data-copy-text")
        if text is not None:
            payloads.append(text)
    return payloads
