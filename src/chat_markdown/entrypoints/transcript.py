from __future__ import annotations

from pathlib import Path

import typer

from chat_markdown.domain.models import try_load_transcript_json
from chat_markdown.entrypoints.render import load_config_or_exit, write_output
from chat_markdown.transcript import transcript_to_html


def run_transcript(
    *,
    source: Path,
    output: Path | None,
    title: str | None,
    config_path: Path | None,
) -> None:
    config = load_config_or_exit(config_path)
    loaded = try_load_transcript_json(source.read_bytes())
    if loaded.value is None:
        typer.echo(f"Error: invalid transcript {source}:\n{loaded.error}", err=True)
        raise SystemExit(1)

    transcript = loaded.value
    page = transcript_to_html(transcript, config, title=title or f"Chat {transcript.session_id}")
    write_output(page, output=output)
    typer.echo(f"Messages: {len(transcript.messages)}", err=True)
