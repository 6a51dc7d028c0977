"""Value types for chat messages and their parsed Markdown structure."""

from chat_markdown.domain.blocks import (
    DEFAULT_CODE_LANGUAGE,
    Block,
    BlockKind,
    BoldSpan,
    CodeBlock,
    CodeSpan,
    Heading,
    InlineKind,
    InlineSegment,
    ItalicSpan,
    ListItem,
    Paragraph,
    TextSpan,
)
from chat_markdown.domain.models import (
    ChatMessage,
    ChatTranscript,
    LoadResult,
    MessageType,
)

__all__ = [
    "DEFAULT_CODE_LANGUAGE",
    "Block",
    "BlockKind",
    "BoldSpan",
    "ChatMessage",
    "ChatTranscript",
    "CodeBlock",
    "CodeSpan",
    "Heading",
    "InlineKind",
    "InlineSegment",
    "ItalicSpan",
    "ListItem",
    "LoadResult",
    "MessageType",
    "Paragraph",
    "TextSpan",
]
