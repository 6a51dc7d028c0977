from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar

DEFAULT_CODE_LANGUAGE = "text"


class BlockKind(StrEnum):
    paragraph = "paragraph"
    heading = "heading"
    list_item = "list-item"
    code_block = "code-block"


class InlineKind(StrEnum):
    text = "text"
    bold = "bold"
    italic = "italic"
    code = "code"


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[BlockKind] = BlockKind.paragraph
    text: str


@dataclass(frozen=True)
class Heading:
    kind: ClassVar[BlockKind] = BlockKind.heading
    text: str
    level: int


@dataclass(frozen=True)
class ListItem:
    kind: ClassVar[BlockKind] = BlockKind.list_item
    text: str
    ordered: bool


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code; `text` is the literal body with newlines preserved."""

    kind: ClassVar[BlockKind] = BlockKind.code_block
    text: str
    language: str = DEFAULT_CODE_LANGUAGE


Block = Paragraph | Heading | ListItem | CodeBlock


@dataclass(frozen=True)
class TextSpan:
    kind: ClassVar[InlineKind] = InlineKind.text
    content: str


@dataclass(frozen=True)
class CodeSpan:
    kind: ClassVar[InlineKind] = InlineKind.code
    content: str


@dataclass(frozen=True)
class BoldSpan:
    kind: ClassVar[InlineKind] = InlineKind.bold
    content: str
    children: tuple[InlineSegment, ...] = ()


@dataclass(frozen=True)
class ItalicSpan:
    kind: ClassVar[InlineKind] = InlineKind.italic
    content: str
    children: tuple[InlineSegment, ...] = ()


InlineSegment = TextSpan | CodeSpan | BoldSpan | ItalicSpan


def block_to_dict(block: Block) -> dict[str, Any]:
    data: dict[str, Any] = {"kind": block.kind.value, "text": block.text}
    match block:
        case Heading(level=level):
            data["level"] = level
        case ListItem(ordered=ordered):
            data["ordered"] = ordered
        case CodeBlock(language=language):
            data["language"] = language
    return data


def segment_to_dict(segment: InlineSegment) -> dict[str, Any]:
    data: dict[str, Any] = {"kind": segment.kind.value, "content": segment.content}
    if isinstance(segment, BoldSpan | ItalicSpan):
        data["children"] = [segment_to_dict(child) for child in segment.children]
    return data
