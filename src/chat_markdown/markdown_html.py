from __future__ import annotations

from functools import lru_cache
from typing import Any

from chat_markdown.block_parser import parse_blocks
from chat_markdown.domain.blocks import ListItem, Paragraph, block_to_dict, segment_to_dict
from chat_markdown.html_nodes import to_html
from chat_markdown.inline_parser import parse_inline
from chat_markdown.renderer import render_markdown
from chat_markdown.renderer_config import RendererConfig


def markdown_to_html(content: str, config: RendererConfig | None = None) -> str:
    """Render one chat message to an HTML fragment.

    Supported:
    - Headings: `#` .. `######` (a space after the hashes is required)
    - Bullet lists: `- `, `* `
    - Numbered lists: `1. `
    - Fenced code blocks with a language tag, highlighted when the tag is known
    - Inline code: `` `code` ``
    - Inline emphasis: `*em*` and `**strong**`, nestable

    Every input renders; malformed Markdown degrades to literal text.
    """
    return to_html(render_markdown(content, config))


def describe_blocks(content: str) -> list[dict[str, Any]]:
    """JSON-ready parse tree: each block, plus `inline` segments for paragraphs and list items."""
    described: list[dict[str, Any]] = []
    for block in parse_blocks(content):
        data = block_to_dict(block)
        if isinstance(block, Paragraph | ListItem):
            data["inline"] = [segment_to_dict(segment) for segment in parse_inline(block.text)]
        described.append(data)
    return described


@lru_cache(maxsize=256)
def render_markdown_cached(content: str, config: RendererConfig | None = None) -> str:
    return markdown_to_html(content, config)
