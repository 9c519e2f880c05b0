"""Markdown pass for bracket colour tags, built on markdown-it-py.

The colour rule runs after inline parsing, so it sees the same text tokens
the renderer would escape and emit. A matching ``text`` token is spliced
into plain ``text`` tokens and ``html_inline`` tokens carrying a literal
``<span style="color:...">`` string. The HTML renderer emits
``html_inline`` content verbatim whatever the ``html`` option says, so the
spans survive even on presets that disable raw HTML input.

Colour tags split by other inline syntax (``[color=red]*a*[/color]``) do
not match: the body crosses token boundaries and is left as written.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.token import Token

from richcopy.config import MarkdownConfig, get_settings
from richcopy.markup.color_tags import (
    NodeScan,
    scan_text,
    span_markup,
    split_color_tags,
)

if TYPE_CHECKING:
    from markdown_it.rules_core import StateCore

logger = logging.getLogger(__name__)

RULE_NAME = "color_tags"


def _splice_color_tags(tokens: list[Token]) -> int:
    i = 0
    spans = 0
    while i < len(tokens):
        token = tokens[i]
        if token.type != "text":
            i += 1
            continue

        fragments = split_color_tags(token.content)
        if fragments is None:
            i += 1
            continue

        replacement: list[Token] = []
        for fragment in fragments:
            if isinstance(fragment, str):
                replacement.append(
                    Token("text", "", 0, content=fragment, level=token.level)
                )
            else:
                replacement.append(
                    Token(
                        "html_inline",
                        "",
                        0,
                        content=span_markup(fragment),
                        level=token.level,
                    )
                )
                spans += 1

        tokens[i : i + 1] = replacement
        i += len(replacement)

    return spans


def colorize_tokens(tokens: list[Token]) -> list[Token]:
    """Splice colour tags out of ``text`` tokens, in place.

    Tokens that are not ``text`` or hold no tag keep their identity.

    Args:
        tokens: Children of an ``inline`` token.

    Returns:
        The same list object, for chaining.
    """
    _splice_color_tags(tokens)
    return tokens


def _color_tags_rule(state: StateCore) -> None:
    spans = 0
    for block in state.tokens:
        if block.type == "inline" and block.children:
            spans += _splice_color_tags(block.children)

    if spans:
        logger.debug("Replaced %d colour tag(s) in Markdown source", spans)


def color_tags_plugin(md: MarkdownIt) -> None:
    """markdown-it-py plugin: render ``[color=...]...[/color]`` as styled spans.

    Usage::

        md = MarkdownIt("commonmark").use(color_tags_plugin)
    """
    md.core.ruler.push(RULE_NAME, _color_tags_rule)


def _base_markdown(config: MarkdownConfig) -> MarkdownIt:
    md = MarkdownIt(config.preset)
    if config.enable_tables:
        md.enable("table")
    if config.enable_strikethrough:
        md.enable("strikethrough")
    return md


def create_markdown(config: MarkdownConfig | None = None) -> MarkdownIt:
    """Build a Markdown parser with the colour rule installed.

    Args:
        config: Parser options. Defaults to ``get_settings().markdown``.
    """
    if config is None:
        config = get_settings().markdown
    return _base_markdown(config).use(color_tags_plugin)


def render_markdown(text: str, md: MarkdownIt | None = None) -> str:
    """Render storefront Markdown copy to HTML with colour tags applied.

    Args:
        text: Markdown source, e.g. a homepage section body.
        md: A parser from ``create_markdown``. One is built from settings
            when omitted.

    Returns:
        Rendered HTML. Empty or whitespace-only input renders to ``""``.
    """
    if not text or not text.strip():
        return ""

    if md is None:
        md = create_markdown()
    return md.render(text)


def scan_markdown(text: str, config: MarkdownConfig | None = None) -> list[NodeScan]:
    """Report the ``text`` tokens the colour rule would see, without rendering.

    The source is parsed with the same options as ``create_markdown`` but
    without the colour rule, so each ``NodeScan`` describes one token as the
    rule receives it. Tags split by inline syntax or sitting in code spans
    and raw HTML are therefore reported exactly as rendering treats them.

    Args:
        text: Markdown source.
        config: Parser options. Defaults to ``get_settings().markdown``.

    Returns:
        One ``NodeScan`` per text token holding a ``[color=`` opener, in
        source order. ``NodeScan.line`` is the 1-based source line.
    """
    if not text or "[color=" not in text:
        return []
    if config is None:
        config = get_settings().markdown

    scans: list[NodeScan] = []
    for block in _base_markdown(config).parse(text):
        if block.type != "inline" or not block.children:
            continue

        line = block.map[0] + 1 if block.map else None
        for child in block.children:
            if child.type in ("softbreak", "hardbreak"):
                if line is not None:
                    line += 1
            elif child.type == "text":
                scan = scan_text(child.content, line)
                if scan is not None:
                    scans.append(scan)

    return scans
