from __future__ import annotations

import re

from chat_markdown.domain.blocks import (
    DEFAULT_CODE_LANGUAGE,
    Block,
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
)

_FENCE = "```"
_HEADING_RE = re.compile(r"^(?P<level>#{1,6})\s+(?P<text>.+)$")
_UL_ITEM_RE = re.compile(r"^[*-]\s+")
_OL_ITEM_RE = re.compile(r"^[0-9]+\.\s+")


def parse_blocks(text: str) -> list[Block]:
    """Split chat text into paragraph, heading, list-item and code-block blocks.

    Lines are classified independently, in this order: code fence, heading,
    bullet list, numbered list, blank, paragraph. Marker characters are
    stripped from the block text; paragraph lines are kept verbatim.
    An unterminated fence runs to the end of the input.
    """
    lines = text.split("\n")
    blocks: list[Block] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        trimmed = line.strip()

        if trimmed.startswith(_FENCE):
            idx = _consume_code_block(lines, idx, blocks)
            continue

        if (match := _HEADING_RE.match(trimmed)) is not None:
            blocks.append(Heading(text=match.group("text"), level=len(match.group("level"))))
            idx += 1
            continue

        if _UL_ITEM_RE.match(trimmed) is not None:
            idx = _consume_list_run(lines, idx, blocks, item_re=_UL_ITEM_RE, ordered=False)
            continue

        if _OL_ITEM_RE.match(trimmed) is not None:
            idx = _consume_list_run(lines, idx, blocks, item_re=_OL_ITEM_RE, ordered=True)
            continue

        if not trimmed:
            idx += 1
            continue

        blocks.append(Paragraph(text=line))
        idx += 1

    return blocks


def _consume_code_block(lines: list[str], start: int, blocks: list[Block]) -> int:
    language = lines[start].strip()[len(_FENCE) :].strip() or DEFAULT_CODE_LANGUAGE
    body: list[str] = []
    idx = start + 1
    while idx < len(lines) and not lines[idx].strip().startswith(_FENCE):
        body.append(lines[idx])
        idx += 1
    blocks.append(CodeBlock(text="\n".join(body), language=language))
    # skip the closing fence; past the end when the fence was never closed
    return idx + 1


def _consume_list_run(
    lines: list[str],
    start: int,
    blocks: list[Block],
    *,
    item_re: re.Pattern[str],
    ordered: bool,
) -> int:
    idx = start
    while idx < len(lines):
        trimmed = lines[idx].strip()
        if item_re.match(trimmed) is None:
            break
        blocks.append(ListItem(text=item_re.sub("", trimmed, count=1), ordered=ordered))
        idx += 1
    return idx
