"""Bracket colour tag rendering for HTML trees and Markdown token streams."""

from richcopy.markup.color_tags import (
    COLOR_TAG_PATTERN,
    ColorSpan,
    NodeScan,
    color_style,
    find_stray_openers,
    iter_color_tags,
    scan_text,
    span_markup,
    split_color_tags,
)
from richcopy.markup.html_tree import colorize_html, colorize_tree, scan_html, scan_tree
from richcopy.markup.markdown_ast import (
    color_tags_plugin,
    colorize_tokens,
    create_markdown,
    render_markdown,
    scan_markdown,
)

__all__ = [
    "COLOR_TAG_PATTERN",
    "ColorSpan",
    "NodeScan",
    "color_style",
    "color_tags_plugin",
    "colorize_html",
    "colorize_tokens",
    "colorize_tree",
    "create_markdown",
    "find_stray_openers",
    "iter_color_tags",
    "render_markdown",
    "scan_html",
    "scan_markdown",
    "scan_text",
    "scan_tree",
    "span_markup",
    "split_color_tags",
]
