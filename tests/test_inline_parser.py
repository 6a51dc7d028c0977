from __future__ import annotations

import pytest

from chat_markdown.domain.blocks import BoldSpan, CodeSpan, InlineKind, ItalicSpan, TextSpan
from chat_markdown.inline_parser import parse_inline


def test_nested_italic_inside_bold() -> None:
    assert parse_inline("**bold *and italic* text**") == [
        BoldSpan(
            content="bold *and italic* text",
            children=(
                TextSpan(content="bold "),
                ItalicSpan(content="and italic", children=(TextSpan(content="and italic"),)),
                TextSpan(content=" text"),
            ),
        ),
    ]


def test_inline_code_is_not_parsed_further() -> None:
    assert parse_inline("`*not bold*`") == [CodeSpan(content="*not bold*")]


def test_inline_code_inside_bold() -> None:
    assert parse_inline("**a `*` b**") == [
        BoldSpan(
            content="a `*` b",
            children=(TextSpan(content="a "), CodeSpan(content="*"), TextSpan(content=" b")),
        ),
    ]


@pytest.mark.parametrize("text", ["** **", "****", "**", "*", "* *"])
def test_empty_emphasis_degrades_to_text(text: str) -> None:
    assert parse_inline(text) == [TextSpan(content=text)]


@pytest.mark.parametrize("text", ["`unclosed code", "**unclosed bold", "*unclosed italic"])
def test_unmatched_delimiters_are_literal(text: str) -> None:
    assert parse_inline(text) == [TextSpan(content=text)]


def test_asterisks_next_to_whitespace_are_not_emphasis() -> None:
    assert parse_inline("a * b * c") == [TextSpan(content="a * b * c")]
    assert parse_inline("*\tx*") == [TextSpan(content="*\tx*")]
    assert parse_inline("*x *") == [TextSpan(content="*x *")]


def test_mixed_segments_flush_text_buffer_in_order() -> None:
    assert parse_inline("mix `a` and **b**, then *c*.") == [
        TextSpan(content="mix "),
        CodeSpan(content="a"),
        TextSpan(content=" and "),
        BoldSpan(content="b", children=(TextSpan(content="b"),)),
        TextSpan(content=", then "),
        ItalicSpan(content="c", children=(TextSpan(content="c"),)),
        TextSpan(content="."),
    ]


def test_empty_inline_code_is_a_code_segment() -> None:
    assert parse_inline("a``b") == [TextSpan(content="a"), CodeSpan(content=""), TextSpan(content="b")]


def test_plain_text_is_one_segment() -> None:
    text = "The mitochondria is the powerhouse of the cell."
    assert parse_inline(text) == [TextSpan(content=text)]


def test_empty_string_has_no_segments() -> None:
    assert parse_inline("") == []


def test_segment_kinds() -> None:
    segments = parse_inline("t `c` **b** *i*")
    assert [segment.kind for segment in segments] == [
        InlineKind.text,
        InlineKind.code,
        InlineKind.text,
        InlineKind.bold,
        InlineKind.text,
        InlineKind.italic,
    ]
