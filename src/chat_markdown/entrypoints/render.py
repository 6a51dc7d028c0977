from __future__ import annotations

import json
import sys
from enum import StrEnum
from pathlib import Path

import typer

from chat_markdown.markdown_html import describe_blocks, markdown_to_html
from chat_markdown.renderer_config import RendererConfig, RendererConfigError, load_renderer_config
from chat_markdown.transcript import standalone_page


class OutputFormat(StrEnum):
    html = "html"
    blocks = "blocks"


def load_config_or_exit(config_path: Path | None) -> RendererConfig:
    try:
        return load_renderer_config(config_path)
    except RendererConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc


def write_output(text: str, *, output: Path | None) -> None:
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote: {output}", err=True)


def _read_source(source: Path | None) -> str:
    if source is None or str(source) == "-":
        return sys.stdin.read()
    return source.read_text(encoding="utf-8")


def run_render(
    *,
    source: Path | None,
    output_format: OutputFormat,
    standalone: bool,
    output: Path | None,
    config_path: Path | None,
) -> None:
    config = load_config_or_exit(config_path)
    content = _read_source(source)

    if output_format == OutputFormat.blocks:
        write_output(json.dumps(describe_blocks(content), ensure_ascii=False, indent=2) + "\n", output=output)
        return

    fragment = markdown_to_html(content, config)
    if standalone:
        title = source.name if source is not None and str(source) != "-" else "Chat message"
        write_output(standalone_page(fragment, title=title), output=output)
        return
    write_output(fragment + "\n", output=output)
