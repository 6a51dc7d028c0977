from __future__ import annotations

from chat_markdown.markdown_html import describe_blocks, markdown_to_html, render_markdown_cached


def test_markdown_to_html_is_stable() -> None:
    markdown = "\n".join(
        [
            "# Title",
            "",
            "See `code` and **bold**.",
            "",
            "- One",
            "- Two",
            "",
        ],
    )

    expected = "".join(
        [
            '<div class="md-content">',
            '<h1 class="md-heading" style="font-size: 1.4rem">Title</h1>',
            '<p class="md-paragraph">See <code class="md-inline-code">code</code> and <strong>bold</strong>.</p>',
            '<ul class="md-list md-list--bullet">',
            "<li>One</li>",
            "<li>Two</li>",
            "</ul>",
            "</div>",
        ],
    )

    rendered = markdown_to_html(markdown)
    assert rendered == expected
    assert rendered == markdown_to_html(markdown)


def test_render_markdown_cached_matches_uncached() -> None:
    markdown = "Some *notes*\n```sql\nSELECT 1;\n```"
    assert render_markdown_cached(markdown) == markdown_to_html(markdown)
    assert render_markdown_cached(markdown) == render_markdown_cached(markdown)


def test_describe_blocks_includes_inline_segments() -> None:
    described = describe_blocks("## Quiz\n1. What is **ATP**?\n```\nraw *text*\n```")
    assert described == [
        {"kind": "heading", "text": "Quiz", "level": 2},
        {
            "kind": "list-item",
            "text": "What is **ATP**?",
            "ordered": True,
            "inline": [
                {"kind": "text", "content": "What is "},
                {"kind": "bold", "content": "ATP", "children": [{"kind": "text", "content": "ATP"}]},
                {"kind": "text", "content": "?"},
            ],
        },
        {"kind": "code-block", "text": "raw *text*", "language": "text"},
    ]
