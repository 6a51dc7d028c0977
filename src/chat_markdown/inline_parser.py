from __future__ import annotations

from chat_markdown.domain.blocks import BoldSpan, CodeSpan, InlineSegment, ItalicSpan, TextSpan


def parse_inline(text: str) -> list[InlineSegment]:
    """Split paragraph or list-item text into text, bold, italic and code segments.

    Supported:
    - Inline code: `` `code` `` (never parsed further)
    - Strong: `**strong**`
    - Emphasis: `*em*` (no whitespace just inside the asterisks)

    Bold and italic content is parsed recursively. Unmatched or empty
    delimiters stay in the output as plain text.
    """
    segments: list[InlineSegment] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            segments.append(TextSpan(content="".join(buffer)))
            buffer.clear()

    idx = 0
    while idx < len(text):
        parsed = _try_parse_token(text, idx)
        if parsed is None:
            buffer.append(text[idx])
            idx += 1
            continue
        segment, next_idx = parsed
        flush()
        segments.append(segment)
        idx = next_idx

    flush()
    return segments


def _try_parse_token(text: str, idx: int) -> tuple[InlineSegment, int] | None:
    for parser in (_try_parse_code, _try_parse_bold, _try_parse_italic):
        parsed = parser(text, idx)
        if parsed is not None:
            return parsed
    return None


def _try_parse_code(text: str, idx: int) -> tuple[InlineSegment, int] | None:
    if not text.startswith("`", idx):
        return None
    end = text.find("`", idx + 1)
    if end == -1:
        return None
    return CodeSpan(content=text[idx + 1 : end]), end + 1


def _try_parse_bold(text: str, idx: int) -> tuple[InlineSegment, int] | None:
    if not text.startswith("**", idx):
        return None
    end = text.find("**", idx + 2)
    if end == -1:
        return None
    content = text[idx + 2 : end]
    if not content.strip():
        return None
    return BoldSpan(content=content, children=tuple(parse_inline(content))), end + 2


def _try_parse_italic(text: str, idx: int) -> tuple[InlineSegment, int] | None:
    if not text.startswith("*", idx) or text.startswith("**", idx):
        return None
    end = text.find("*", idx + 1)
    if end == -1:
        return None
    content = text[idx + 1 : end]
    if not content.strip():
        return None
    # an asterisk next to whitespace is a stray character, not emphasis
    if text[idx + 1].isspace() or text[end - 1].isspace():
        return None
    return ItalicSpan(content=content, children=tuple(parse_inline(content))), end + 1
