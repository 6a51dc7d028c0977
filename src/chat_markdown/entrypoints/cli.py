from pathlib import Path
from typing import Annotated

import typer

from chat_markdown.entrypoints.render import OutputFormat

app = typer.Typer(add_completion=False)

_ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        dir_okay=False,
        help="Renderer config YAML (default: $CHAT_MARKDOWN_CONFIG or ~/.config/chat-markdown/config.yaml).",
    ),
]


@app.command()
def version() -> None:
    """Print version."""
    from chat_markdown import __version__

    typer.echo(__version__)


@app.command()
def render(
    source: Annotated[
        Path | None,
        typer.Argument(help="Markdown message file, or '-' for stdin (default: stdin)."),
    ] = None,
    *,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="html: rendered fragment; blocks: parsed structure as JSON."),
    ] = OutputFormat.html,
    standalone: Annotated[
        bool,
        typer.Option(help="Wrap the fragment in a full HTML page with styles and copy buttons."),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", dir_okay=False, help="Write to a file instead of stdout."),
    ] = None,
    config: _ConfigOption = None,
) -> None:
    """Render one chat message from Markdown."""
    from chat_markdown.entrypoints.render import run_render

    run_render(
        source=source,
        output_format=output_format,
        standalone=standalone,
        output=output,
        config_path=config,
    )


@app.command()
def transcript(
    source: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Chat transcript JSON file."),
    ],
    *,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", dir_okay=False, help="Write the page to a file instead of stdout."),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option(help="Page title (default: derived from the session id)."),
    ] = None,
    config: _ConfigOption = None,
) -> None:
    """Render a whole chat transcript as a standalone HTML page."""
    from chat_markdown.entrypoints.transcript import run_transcript

    run_transcript(source=source, output=output, title=title, config_path=config)


@app.command()
def languages() -> None:
    """List code fence language tags that get syntax highlighting."""
    from chat_markdown.highlighter import supported_languages

    for language in supported_languages():
        typer.echo(language)


@app.command()
def preview(
    *,
    open_browser: Annotated[
        bool,
        typer.Option("--browser/--no-browser", help="Open the preview page in a web browser."),
    ] = True,
    config: _ConfigOption = None,
) -> None:
    """Start a local web page that renders Markdown as you type."""
    from chat_markdown.entrypoints.preview_web import run_preview
    from chat_markdown.entrypoints.render import load_config_or_exit

    run_preview(config=load_config_or_exit(config), open_browser=open_browser)


def main() -> None:
    app()
