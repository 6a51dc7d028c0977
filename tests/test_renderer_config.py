from __future__ import annotations

from pathlib import Path

import pytest

from chat_markdown.renderer_config import (
    RendererConfig,
    RendererConfigError,
    global_config_path,
    load_renderer_config,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_global_config_path_prefers_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_MARKDOWN_CONFIG", str(tmp_path / "custom.yaml"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert global_config_path() == tmp_path / "custom.yaml"


def test_global_config_path_uses_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHAT_MARKDOWN_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert global_config_path() == tmp_path / "chat-markdown" / "config.yaml"


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_renderer_config(tmp_path / "absent.yaml") == RendererConfig()


def test_default_path_is_used_when_none_given(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "config.yaml", "renderer:\n  copy_label: Kopieren\n")
    monkeypatch.setenv("CHAT_MARKDOWN_CONFIG", str(path))
    assert load_renderer_config().copy_label == "Kopieren"


def test_loads_renderer_section(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.yaml",
        "\n".join(
            [
                "renderer:",
                "  heading_base_rem: 2",
                "  heading_step_rem: 0.2",
                "  highlight_code: false",
                "  user_messages_markdown: false",
                "  show_sources: false",
                "",
            ],
        ),
    )
    config = load_renderer_config(path)
    assert config == RendererConfig(
        heading_base_rem=2.0,
        heading_step_rem=0.2,
        highlight_code=False,
        user_messages_markdown=False,
        show_sources=False,
    )


@pytest.mark.parametrize("text", ["", "other: 1\n", "renderer:\n"])
def test_empty_or_missing_section_returns_defaults(tmp_path: Path, text: str) -> None:
    assert load_renderer_config(_write(tmp_path / "config.yaml", text)) == RendererConfig()


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("renderer: [\n", "Invalid YAML"),
        ("- a\n- b\n", "Expected mapping YAML"),
        ("renderer: 3\n", "Expected mapping for renderer"),
        ("renderer:\n  colour: red\n", "Unknown key renderer.colour"),
        ("renderer:\n  highlight_code: 'yes'\n", "renderer.highlight_code must be a boolean"),
        ("renderer:\n  heading_base_rem: true\n", "renderer.heading_base_rem must be a number"),
        ("renderer:\n  copy_label: ''\n", "renderer.copy_label must be a non-empty string"),
        ("renderer:\n  heading_step_rem: 1\n", "Invalid renderer config"),
    ],
)
def test_invalid_config_raises_with_context(tmp_path: Path, text: str, message: str) -> None:
    path = _write(tmp_path / "config.yaml", text)
    with pytest.raises(RendererConfigError) as excinfo:
        load_renderer_config(path)
    assert message in str(excinfo.value)
    assert str(path) in str(excinfo.value)


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        RendererConfig(heading_base_rem=0)
    with pytest.raises(ValueError):
        RendererConfig(heading_step_rem=-0.1)
    with pytest.raises(ValueError):
        RendererConfig(heading_base_rem=0.5, heading_step_rem=0.1)
    with pytest.raises(ValueError):
        RendererConfig(copy_label="  ")


def test_heading_size_rem() -> None:
    config = RendererConfig()
    assert [config.heading_size_rem(level) for level in range(1, 7)] == [1.4, 1.3, 1.2, 1.1, 1.0, 0.9]
