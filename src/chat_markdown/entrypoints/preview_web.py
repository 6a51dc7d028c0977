from __future__ import annotations

import json
import socket
import sys
import threading
import webbrowser
from collections.abc import Callable
from pathlib import Path
from typing import Any

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from chat_markdown.domain.models import ChatMessage, ChatTranscript, MessageType
from chat_markdown.highlighter import supported_languages
from chat_markdown.html_nodes import to_html
from chat_markdown.markdown_html import describe_blocks
from chat_markdown.renderer import COPY_CODE_ACTION, copy_payloads
from chat_markdown.renderer_config import RendererConfig
from chat_markdown.transcript import render_message, standalone_page, transcript_to_html

_SHUTDOWN_TIMEOUT_SECONDS = 60 * 60  # 1 hour
_PREVIEW_HTML_PATH = Path(__file__).parent.parent / "static" / "preview.html"


def _start_daemon_thread(target: Callable[..., Any], *args: Any) -> None:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()


class _PreviewApi:
    def __init__(
        self,
        *,
        config: RendererConfig,
        on_done: Callable[[], None] | None,
    ) -> None:
        self.config = config
        self.on_done = on_done

    async def _parse_json_object(self, request: Request) -> tuple[dict[str, Any] | None, Response | None]:
        raw = await request.body()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            return None, JSONResponse({"error": "Invalid JSON"}, status_code=400)
        if not isinstance(payload, dict):
            return None, JSONResponse({"error": "Expected JSON object"}, status_code=400)
        return payload, None

    async def serve_html(self, _request: Request) -> Response:
        try:
            body = _PREVIEW_HTML_PATH.read_text(encoding="utf-8")
            page = standalone_page(body, title="chat-markdown preview")
        except OSError as exc:
            return PlainTextResponse(f"Failed to load preview.html: {exc}", status_code=500)
        return HTMLResponse(page)

    async def handle_render(self, request: Request) -> Response:
        payload, error_response = await self._parse_json_object(request)
        if error_response is not None:
            return error_response
        assert payload is not None

        content = payload.get("content")
        if not isinstance(content, str):
            return JSONResponse({"error": "content must be a string"}, status_code=400)
        raw_type = payload.get("message_type", MessageType.assistant.value)
        try:
            message_type = MessageType(raw_type)
        except ValueError:
            return JSONResponse({"error": f"Unknown message_type: {raw_type}"}, status_code=400)

        message = ChatMessage(message_id="preview", message_type=message_type, content=content)
        # the bubble's first child is the rendered content
        content_node = render_message(message, self.config).children[0]
        return JSONResponse(
            {
                "html": to_html(content_node),
                "blocks": describe_blocks(content),
                "copy_payloads": copy_payloads(content_node, action=COPY_CODE_ACTION),
            },
        )

    async def handle_transcript(self, request: Request) -> Response:
        raw = await request.body()
        try:
            transcript = ChatTranscript.from_json(raw)
        except ValidationError as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)
        return JSONResponse({"html": transcript_to_html(transcript, self.config)})

    async def serve_languages(self, _request: Request) -> Response:
        return JSONResponse({"languages": supported_languages()})

    async def handle_done(self, _request: Request) -> Response:
        if self.on_done is not None:
            _start_daemon_thread(self.on_done)
        return JSONResponse({"ok": True})


def create_preview_app(
    *,
    config: RendererConfig | None = None,
    on_done: Callable[[], None] | None = None,
) -> Starlette:
    api = _PreviewApi(config=config or RendererConfig(), on_done=on_done)

    routes = [
        Route("/", api.serve_html, methods=["GET"]),
        Route("/api/render", api.handle_render, methods=["POST"]),
        Route("/api/transcript", api.handle_transcript, methods=["POST"]),
        Route("/api/languages", api.serve_languages, methods=["GET"]),
        Route("/api/done", api.handle_done, methods=["POST"]),
    ]

    return Starlette(routes=routes)


def _run_uvicorn_server(server: uvicorn.Server, sock: socket.socket) -> None:
    server.run(sockets=[sock])


def run_preview(*, config: RendererConfig, open_browser: bool) -> None:
    """Launch the live Markdown preview web UI."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen(128)
        host = str(sock.getsockname()[0])
        port = int(sock.getsockname()[1])
        url = f"http://{host}:{port}/"

        holder: dict[str, uvicorn.Server] = {}

        def request_shutdown() -> None:
            server = holder.get("server")
            if server is not None:
                server.should_exit = True

        app = create_preview_app(config=config, on_done=request_shutdown)
        uvicorn_config = uvicorn.Config(
            app=app,
            host=host,
            port=port,
            access_log=False,
            log_level="error",
        )
        server = uvicorn.Server(config=uvicorn_config)
        holder["server"] = server

        shutdown_timer = threading.Timer(_SHUTDOWN_TIMEOUT_SECONDS, request_shutdown)
        shutdown_timer.daemon = True
        shutdown_timer.start()

        print(f"Preview: {url}", file=sys.stderr)
        if open_browser:
            webbrowser.open(url)

        try:
            _run_uvicorn_server(server, sock)
        finally:
            shutdown_timer.cancel()

    print("Preview closed.", file=sys.stderr)
