"""HTML post-processing pass for bracket colour tags.

Runs after content has been turned into HTML (an editor's rich-text output,
or Markdown already rendered without the colour plugin). Every text node in
the tree is scanned and each ``[color=...]...[/color]`` becomes a real
``<span style="color:...">`` element.

lxml has no standalone text nodes: text lives on ``element.text`` (before
the first child) and ``element.tail`` (after the element, inside its
parent). Both are treated as text nodes here.

Raw-text elements (``<script>``, ``<style>``, ``<textarea>``, ``<title>``)
hold code or form state rather than rendered copy, so their text is never
scanned. Text after them still is.
"""

from __future__ import annotations

import html
import logging
import re

from lxml import html as lxml_html
from lxml.html import HtmlElement

from richcopy.markup.color_tags import (
    ColorSpan,
    NodeScan,
    color_style,
    scan_text,
    split_color_tags,
)

logger = logging.getLogger(__name__)

_DOCUMENT_START = re.compile(
    r"\s*(?:<!--.*?-->\s*)*"  # leading comments
    r"<(?:!doctype|html|head|body)[\s>]",
    re.IGNORECASE | re.DOTALL,
)
_FRAGMENT_WRAPPER = "div"
_RAW_TEXT_TAGS = frozenset({"script", "style", "textarea", "title"})


def _holds_copy(node: HtmlElement) -> bool:
    # Comments and processing instructions have non-string tags; their
    # .text is not document text.
    return isinstance(node.tag, str) and node.tag.lower() not in _RAW_TEXT_TAGS


def _make_span(span: ColorSpan) -> HtmlElement:
    element = lxml_html.Element("span")
    element.set("style", color_style(span.color))
    element.text = span.text
    return element


def _colorize_text(element: HtmlElement) -> int:
    """Split ``element.text`` into leading text plus spans. Returns span count."""
    if not element.text:
        return 0

    fragments = split_color_tags(element.text)
    if fragments is None:
        return 0

    element.text = None
    anchor: HtmlElement | None = None
    insert_at = 0
    count = 0

    for fragment in fragments:
        if isinstance(fragment, str):
            if anchor is None:
                element.text = fragment
            else:
                anchor.tail = fragment
            continue

        span = _make_span(fragment)
        element.insert(insert_at, span)
        insert_at += 1
        anchor = span
        count += 1

    return count


def _colorize_tail(node: HtmlElement) -> int:
    """Split ``node.tail`` into spans inserted after ``node``. Returns span count."""
    if not node.tail:
        return 0

    parent = node.getparent()
    if parent is None:
        return 0

    fragments = split_color_tags(node.tail)
    if fragments is None:
        return 0

    node.tail = None
    anchor = node
    insert_at = parent.index(node) + 1
    count = 0

    for fragment in fragments:
        if isinstance(fragment, str):
            anchor.tail = fragment
            continue

        span = _make_span(fragment)
        parent.insert(insert_at, span)
        insert_at += 1
        anchor = span
        count += 1

    return count


def colorize_tree(root: HtmlElement) -> HtmlElement:
    """Replace colour tags in every text node of an lxml tree, in place.

    Nodes are visited from a snapshot taken before any mutation, so spans
    inserted by this pass are never re-scanned. Text without a tag is left
    untouched.

    Args:
        root: Root of an ``lxml.html`` element tree.

    Returns:
        The same ``root``, for chaining.

    Raises:
        TypeError: If ``root`` is None.
    """
    if root is None:
        msg = "colorize_tree() requires an element, got None"
        raise TypeError(msg)

    spans = 0
    for node in list(root.iter()):
        if _holds_copy(node):
            spans += _colorize_text(node)
        if node is not root:
            spans += _colorize_tail(node)

    if spans:
        logger.debug("Replaced %d colour tag(s) in <%s> tree", spans, root.tag)
    return root


def _scan_nodes(root: HtmlElement, root_line: int | None) -> list[NodeScan]:
    scans: list[NodeScan] = []
    for node in root.iter():
        line = node.sourceline
        if node is root and line is None:
            line = root_line
        if _holds_copy(node) and node.text:
            scan = scan_text(node.text, line)
            if scan is not None:
                scans.append(scan)
        if node is not root and node.tail:
            scan = scan_text(node.tail, line)
            if scan is not None:
                scans.append(scan)
    return scans


def scan_tree(root: HtmlElement) -> list[NodeScan]:
    """Report what ``colorize_tree`` would do to ``root``, without mutating it.

    Text nodes are visited in the same order and under the same rules as
    the colour pass. ``NodeScan.line`` is the source line where the element
    owning the text starts (for a tail, the element it follows).

    Raises:
        TypeError: If ``root`` is None.
    """
    if root is None:
        msg = "scan_tree() requires an element, got None"
        raise TypeError(msg)
    return _scan_nodes(root, None)


def _is_document(html_content: str) -> bool:
    return _DOCUMENT_START.match(html_content) is not None


def _parse_fragment(html_content: str) -> HtmlElement:
    return lxml_html.fragment_fromstring(html_content, create_parent=_FRAGMENT_WRAPPER)


def _inner_html(wrapper: HtmlElement) -> str:
    parts = [html.escape(wrapper.text, quote=False)] if wrapper.text else []
    parts.extend(lxml_html.tostring(child, encoding="unicode") for child in wrapper)
    return "".join(parts)


def colorize_html(html_content: str) -> str:
    """Apply the colour pass to an HTML string.

    Full documents (a doctype, ``<html>``, ``<head>`` or ``<body>`` first,
    optionally after comments) are parsed and serialised as documents.
    Fragments (including bare text) are parsed inside a synthetic wrapper
    whose inner HTML is returned, so no ``<p>`` or ``<div>`` is added around
    the content.

    Input that is parsed comes back re-serialised by lxml, not byte for
    byte: named entities become characters (``&nbsp;`` turns into a literal
    U+00A0), attributes are double-quoted and a document may gain implied
    ``<html>``/``<body>`` elements.

    Args:
        html_content: HTML document or fragment.

    Returns:
        HTML with every colour tag rendered as a styled ``<span>``. Input
        with no ``[color=`` at all is returned unchanged without parsing.
    """
    if not html_content or not html_content.strip():
        return html_content

    if "[color=" not in html_content:
        return html_content

    if _is_document(html_content):
        tree = lxml_html.document_fromstring(html_content)
        colorize_tree(tree)
        return lxml_html.tostring(tree.getroottree(), encoding="unicode")

    wrapper = _parse_fragment(html_content)
    colorize_tree(wrapper)
    return _inner_html(wrapper)


def scan_html(html_content: str) -> list[NodeScan]:
    """Parse ``html_content`` the way ``colorize_html`` does and scan it.

    Returns:
        One ``NodeScan`` per text node holding a ``[color=`` opener, in
        document order. Empty when ``colorize_html`` would skip parsing.
    """
    if not html_content or "[color=" not in html_content:
        return []

    if _is_document(html_content):
        return _scan_nodes(lxml_html.document_fromstring(html_content), None)

    # Leading fragment text lands on the synthetic wrapper, which has no
    # source line of its own.
    return _scan_nodes(_parse_fragment(html_content), 1)
