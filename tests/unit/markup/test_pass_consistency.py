"""The HTML and Markdown passes must agree on what a colour tag is.

Same copy through both pipelines: Markdown rendering with the colour rule,
and plain HTML post-processed by the tree pass. The visible result must be
identical.
"""

from __future__ import annotations

import pytest

from richcopy.config import MarkdownConfig
from richcopy.markup import colorize_html, create_markdown, render_markdown

CASES = [
    "A [color=red]B[/color] C",
    "[color=#B0041A]Bộ sưu tập[/color]",
    "[color=red]A[/color][color=blue]B[/color]",
    "[color=red]A",
    "[color=12]A[/color]",
    "[color=red]a[color=blue]b[/color]c[/color]",
    "x [color=#abc][/color] y",
    "one [color=notacolor]two[/color] three [color=#FFFFFF]four[/color]",
]


@pytest.mark.parametrize("copy", CASES)
def test_markdown_and_html_passes_agree(copy: str) -> None:
    md = create_markdown(MarkdownConfig())

    from_markdown = render_markdown(copy, md).strip()
    from_html = colorize_html(f"<p>{copy}</p>")

    assert from_markdown == from_html


@pytest.mark.parametrize("copy", CASES)
def test_html_pass_is_idempotent(copy: str) -> None:
    once = colorize_html(f"<p>{copy}</p>")
    assert colorize_html(once) == once
