"""Bracket colour tag recogniser shared by the HTML and Markdown passes.

Authors colour fragments of homepage and news copy with an inline tag::

    [color=#B0041A]Bộ sưu tập[/color]
    A [color=red]B[/color] C

The colour spec is ``#`` plus exactly 3 or 6 hex digits, or a bare
alphabetic keyword. The body is captured non-greedily, so the first
``[/color]`` closes the tag and nested openers are opaque text. Anything
that does not match is left alone and rendered literally.

This module only scans strings. The tree walkers in ``html_tree`` and
``markdown_ast`` decide how a match becomes a node.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterator

COLOR_TAG_PATTERN = re.compile(
    r"\[color=(#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})|[a-zA-Z]+)\]"  # opener
    r"(.*?)"  # body, never crosses a newline
    r"\[/color\]"
)

_OPENER = "[color="


@dataclass(frozen=True, slots=True)
class ColorSpan:
    """One ``[color=...]...[/color]`` occurrence within a text value.

    Attributes:
        color: The colour spec exactly as written (``#B0041A``, ``red``).
        text: The literal body text, never re-scanned.
        start: Offset of the opening ``[`` in the source string.
        end: Offset just past the closing ``]`` in the source string.
    """

    color: str
    text: str
    start: int
    end: int


Fragment: TypeAlias = str | ColorSpan


def iter_color_tags(value: str) -> Iterator[ColorSpan]:
    """Yield every colour tag in ``value``, left to right, non-overlapping."""
    for match in COLOR_TAG_PATTERN.finditer(value):
        yield ColorSpan(
            color=match.group(1),
            text=match.group(2),
            start=match.start(),
            end=match.end(),
        )


def split_color_tags(value: str) -> list[Fragment] | None:
    """Split a text value into plain-text and colour-span fragments.

    Args:
        value: Raw text of a single text node.

    Returns:
        ``None`` if ``value`` holds no colour tag, so callers can leave the
        node untouched. Otherwise the interleaved fragment list, with empty
        plain-text fragments omitted.

    Raises:
        TypeError: If ``value`` is not a string.
    """
    if not isinstance(value, str):
        msg = f"expected text value, got {type(value).__name__}"
        raise TypeError(msg)

    fragments: list[Fragment] = []
    last_index = 0

    for span in iter_color_tags(value):
        if span.start > last_index:
            fragments.append(value[last_index : span.start])
        fragments.append(span)
        last_index = span.end

    if not fragments:
        return None

    if last_index < len(value):
        fragments.append(value[last_index:])

    return fragments


def color_style(color: str) -> str:
    """Return the inline CSS declaration for a colour spec."""
    return f"color:{color}"


def span_markup(span: ColorSpan) -> str:
    """Render a colour span as a literal HTML string.

    The body is escaped so the visible text matches the element-tree output.
    The colour spec needs no escaping since the pattern only admits ``#`` and
    alphanumerics.
    """
    return f'<span style="{color_style(span.color)}">{html.escape(span.text)}</span>'


def find_stray_openers(value: str) -> list[int]:
    """Return offsets of ``[color=`` openers that do not start a valid tag.

    Typical causes are a missing ``[/color]``, an unsupported colour spec
    (``[color=12]``) or a closer on a later line. The transformers pass these
    through as plain text. Openers swallowed inside another tag's body are
    not reported.
    """
    stray: list[int] = []
    cursor = 0

    for span in iter_color_tags(value):
        stray.extend(_openers_between(value, cursor, span.start))
        cursor = span.end

    stray.extend(_openers_between(value, cursor, len(value)))
    return stray


def _openers_between(value: str, start: int, stop: int) -> Iterator[int]:
    pos = value.find(_OPENER, start, stop)
    while pos != -1:
        yield pos
        pos = value.find(_OPENER, pos + 1, stop)


@dataclass(frozen=True, slots=True)
class NodeScan:
    """What a rendering pass will do with one text node.

    Attributes:
        text: The text node's raw value.
        line: 1-based source line of the node, when the parser records one.
        spans: Tags the pass will turn into styled spans.
        stray: Offsets into ``text`` of openers left as visible plain text.
    """

    text: str
    line: int | None
    spans: tuple[ColorSpan, ...]
    stray: tuple[int, ...]


def scan_text(value: str, line: int | None = None) -> NodeScan | None:
    """Scan one text node. Returns ``None`` if it holds no ``[color=`` at all."""
    if _OPENER not in value:
        return None
    return NodeScan(
        text=value,
        line=line,
        spans=tuple(iter_color_tags(value)),
        stray=tuple(find_stray_openers(value)),
    )
