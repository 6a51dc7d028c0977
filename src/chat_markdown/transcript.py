from __future__ import annotations

import html
from pathlib import Path

from chat_markdown.domain.models import ChatMessage, ChatTranscript, MessageType
from chat_markdown.html_nodes import ElementNode, Node, TextNode, element, to_html
from chat_markdown.renderer import render_markdown
from chat_markdown.renderer_config import RendererConfig

COPY_MESSAGE_ACTION = "copy-message"

_STATIC_DIR = Path(__file__).parent / "static"
_STYLESHEET_PATH = _STATIC_DIR / "chat.css"
_COPY_SCRIPT_PATH = _STATIC_DIR / "copy.js"


def render_transcript(transcript: ChatTranscript, config: RendererConfig | None = None) -> ElementNode:
    config = config or RendererConfig()
    bubbles = [render_message(message, config) for message in transcript.messages]
    return element("div", *bubbles, class_="md-transcript", data_session_id=transcript.session_id)


def render_message(message: ChatMessage, config: RendererConfig | None = None) -> ElementNode:
    config = config or RendererConfig()
    children: list[Node] = [_render_content(message, config)]

    if message.sources_referenced and config.show_sources:
        chips = [element("span", TextNode(source), class_="md-source") for source in message.sources_referenced]
        children.append(
            element(
                "div",
                element("p", TextNode("Sources:"), class_="md-sources-label"),
                *chips,
                class_="md-sources",
            ),
        )

    if message.message_type == MessageType.assistant:
        children.append(
            element(
                "div",
                element(
                    "button",
                    TextNode(config.copy_label),
                    type="button",
                    class_="md-copy",
                    data_action=COPY_MESSAGE_ACTION,
                    data_copy_text=message.content,
                ),
                class_="md-message-actions",
            ),
        )

    if message.created_at is not None:
        stamp = message.created_at.isoformat()
        children.append(element("time", TextNode(stamp), datetime=stamp, class_="md-time"))

    return element(
        "div",
        *children,
        class_=f"md-bubble md-bubble--{message.message_type.value}",
        data_message_id=message.message_id,
    )


def _render_content(message: ChatMessage, config: RendererConfig) -> ElementNode:
    if message.message_type == MessageType.user and not config.user_messages_markdown:
        return element("div", element("p", TextNode(message.content), class_="md-literal"), class_="md-content")
    return render_markdown(message.content, config)


def transcript_to_html(
    transcript: ChatTranscript,
    config: RendererConfig | None = None,
    *,
    title: str = "Chat transcript",
) -> str:
    """Render a transcript as a standalone page with the bundled stylesheet and copy script."""
    return standalone_page(to_html(render_transcript(transcript, config)), title=title)


def standalone_page(body_html: str, *, title: str) -> str:
    stylesheet = _STYLESHEET_PATH.read_text(encoding="utf-8")
    script = _COPY_SCRIPT_PATH.read_text(encoding="utf-8")
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{html.escape(title)}</title>",
            f"<style>\n{stylesheet}</style>",
            "</head>",
            "<body>",
            body_html,
            f"<script>\n{script}</script>",
            "</body>",
            "</html>",
            "",
        ],
    )
