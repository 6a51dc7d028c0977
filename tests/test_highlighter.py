from __future__ import annotations

import html
import re

import pytest

from chat_markdown.highlighter import GRAMMARS, PLAIN_TEXT, highlight, supported_languages

_SAMPLES: dict[str, str] = {
    "javascript": "// greet\nconst name = `world`;\nconsole.log(\"hi\", name, 42);",
    "typescript": "interface User { id: number }\nconst u: User = { id: 1 } as User;",
    "python": '@dataclass\ndef area(r: float) -> float:\n    """Circle."""\n    return 3.14 * r ** 2  # approx',
    "java": "public class Main {\n  @Override\n  public String toString() { return \"x\"; }\n}",
    "c": "#include <stdio.h>\nint main(void) { printf(\"%d\\n\", 1); return 0; }",
    "cpp": "#include <vector>\nstd::vector<int> v{1, 2};\nauto x = v.size();",
    "csharp": "var s = $\"Hello {name}\";\nConsole.WriteLine(@\"C:\\path\");",
    "go": "package main\nfunc main() {\n\tfmt.Println(`raw`, nil)\n}",
    "rust": "#[derive(Debug)]\nfn longest<'a>(x: &'a str) -> &'a str { println!(\"{}\", x); x }",
    "sql": "SELECT name, COUNT(*) FROM users WHERE id = 'a''b' -- note\nGROUP BY name;",
    "json": '{"name": "quiz", "count": 3, "ok": true, "tags": [null, -1.5e3]}',
    "yaml": "# config\nrenderer:\n  copy_label: 'Copy'\n  show_sources: true\n  items:\n    - &anchor 12",
    "bash": "# install\nexport PATH=\"$HOME/bin:$PATH\"\npip install --upgrade pkg && echo ${DONE}",
    "css": "/* card */\n.card > a:hover { color: #fff; margin: -0.5rem 10%; }\n@media print { body { display: none !important; } }",
    "html": '<!DOCTYPE html>\n<!-- note -->\n<a href="/x" data-id=\'1\'>Tom &amp; Jerry</a>',
}


def _strip_markup(marked: str) -> str:
    return html.unescape(re.sub(r"<[^>]+>", "", marked))


@pytest.mark.parametrize("language", sorted(_SAMPLES))
def test_highlight_preserves_source_text(language: str) -> None:
    code = _SAMPLES[language]
    marked = highlight(code, language)
    assert _strip_markup(marked) == code
    assert 'class="tok-' in marked


def test_unknown_language_is_escaped_plain_text() -> None:
    assert highlight("<b>&</b>", "brainfuck") == "&lt;b&gt;&amp;&lt;/b&gt;"
    assert highlight("<b>", "text") == "&lt;b&gt;"


def test_language_lookup_is_case_sensitive() -> None:
    assert highlight("def f(): pass", "Python") == "def f(): pass"


def test_python_tokens() -> None:
    marked = highlight("def f():\n    return 1", "python")
    assert '<span class="tok-keyword">def</span>' in marked
    assert '<span class="tok-function">f</span>' in marked
    assert '<span class="tok-keyword">return</span>' in marked
    assert '<span class="tok-number">1</span>' in marked


def test_comment_wins_over_keywords_inside_it() -> None:
    marked = highlight("x = 1  # return if", "py")
    assert '<span class="tok-comment"># return if</span>' in marked


def test_json_property_and_string_are_distinguished() -> None:
    marked = highlight('{"a": "b"}', "json")
    assert '<span class="tok-property">"a"</span>' in marked
    assert '<span class="tok-string">"b"</span>' in marked


def test_sql_keywords_are_case_insensitive() -> None:
    marked = highlight("select * from t", "sql")
    assert '<span class="tok-keyword">select</span>' in marked
    assert '<span class="tok-keyword">from</span>' in marked


def test_string_contents_are_escaped_inside_spans() -> None:
    marked = highlight('const s = "<tag>";', "js")
    assert '<span class="tok-string">"&lt;tag&gt;"</span>' in marked


@pytest.mark.parametrize(
    ("code", "language"),
    [
        ('x = "unterminated', "python"),
        ("'''never closed\n\nstill", "python"),
        ("/* open comment", "c"),
        ("`template ${", "js"),
        ("<!-- open", "html"),
        ("r#\"raw", "rust"),
        ("", "python"),
        ("\n\n", "go"),
    ],
)
def test_malformed_code_never_raises(code: str, language: str) -> None:
    assert _strip_markup(highlight(code, language)) == code


def test_aliases_share_grammars() -> None:
    assert GRAMMARS["js"] is GRAMMARS["javascript"]
    assert GRAMMARS["py"] is GRAMMARS["python"]
    assert GRAMMARS["c++"] is GRAMMARS["cpp"]
    assert GRAMMARS["yml"] is GRAMMARS["yaml"]
    assert GRAMMARS["sh"] is GRAMMARS["bash"]
    assert GRAMMARS["text"] is PLAIN_TEXT


def test_grammar_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        GRAMMARS["brainfuck"] = PLAIN_TEXT  # type: ignore[index]


def test_supported_languages_cover_common_tags() -> None:
    languages = set(supported_languages())
    required = {
        "javascript",
        "typescript",
        "python",
        "java",
        "c",
        "cpp",
        "csharp",
        "go",
        "rust",
        "sql",
        "json",
        "yaml",
        "bash",
        "css",
        "html",
    }
    assert required <= languages
    assert "text" not in languages
