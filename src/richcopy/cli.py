"""Command-line tools for storefront copy authors.

Usage:
    uv run richcopy render homepage.md              # Markdown -> HTML on stdout
    uv run richcopy render body.html -o out.html    # HTML post-processing pass
    uv run richcopy check homepage.md               # list tags, flag stray openers
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from richcopy import setup_logging
from richcopy.markup import colorize_html, render_markdown, scan_html, scan_markdown

if TYPE_CHECKING:
    from richcopy.markup import NodeScan

console = Console()

_FORMAT_BY_SUFFIX = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".html": "html",
    ".htm": "html",
}


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--from",
        dest="source_format",
        choices=("markdown", "html"),
        default=None,
        help="Input format (default: inferred from suffix, else markdown)",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for richcopy subcommands."""
    parser = argparse.ArgumentParser(
        prog="richcopy",
        description="Render and check [color=...] tags in storefront copy.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # render
    render_p = sub.add_parser("render", help="Render a Markdown or HTML file")
    render_p.add_argument("path", help="Input file, or - for stdin")
    _add_format_argument(render_p)
    render_p.add_argument(
        "-o", "--output", default=None, help="Write HTML here instead of stdout"
    )

    # check
    check_p = sub.add_parser("check", help="List colour tags and stray openers")
    check_p.add_argument("path", help="Input file, or - for stdin")
    _add_format_argument(check_p)

    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(
            f"[red]Error:[/] cannot read {escape(path)}: {escape(str(exc))}"
        )
        sys.exit(1)


def _infer_format(path: str, explicit: str | None) -> str:
    if explicit:
        return explicit
    return _FORMAT_BY_SUFFIX.get(Path(path).suffix.lower(), "markdown")


def _line_label(scan: NodeScan, offset: int) -> str:
    """Return the 1-based source line of ``offset`` within a scanned node."""
    if scan.line is None:
        return "?"
    return str(scan.line + scan.text.count("\n", 0, offset))


def _snippet(text: str, offset: int, width: int = 24) -> str:
    snippet = text[offset : offset + width].split("\n", 1)[0]
    return snippet if len(snippet) < width else snippet + "..."


def _cmd_render(path: str, source_format: str | None, output: str | None) -> None:
    source = _read_source(path)
    fmt = _infer_format(path, source_format)

    if fmt == "html":
        result = colorize_html(source)
    else:
        result = render_markdown(source)

    if output is None:
        sys.stdout.write(result)
        return

    Path(output).write_text(result, encoding="utf-8")
    console.print(f"[green]Wrote[/] {output} ({fmt} input)")


def _cmd_check(path: str, source_format: str | None) -> int:
    """Print every colour tag and stray opener. Returns the exit code.

    Reports come from the same text nodes the renderer sees, so a tag whose
    body is split by markup (``[color=red]*a*[/color]``) is flagged here
    just as it is left literal by ``render``.
    """
    source = _read_source(path)
    fmt = _infer_format(path, source_format)
    scans = scan_html(source) if fmt == "html" else scan_markdown(source)

    spans = [(scan, span) for scan in scans for span in scan.spans]
    stray = [(scan, offset) for scan in scans for offset in scan.stray]

    if spans:
        table = Table(title="Colour tags")
        table.add_column("Line", justify="right")
        table.add_column("Colour", style="cyan")
        table.add_column("Text")
        for scan, span in spans:
            # Text() keeps rich from reading the body as console markup
            table.add_row(
                _line_label(scan, span.start), Text(span.color), Text(span.text)
            )
        console.print(table)
    else:
        console.print("[yellow]No colour tags found.[/]")

    for scan, offset in stray:
        console.print(
            f"[yellow]Warning:[/] line {_line_label(scan, offset)}: "
            f"{escape(_snippet(scan.text, offset))} "
            "is not closed, has an invalid colour or wraps other markup; "
            "it will render as plain text"
        )

    if stray:
        console.print(f"[red]{len(stray)} stray opener(s)[/]")
        return 1

    console.print(f"[green]OK[/] {len(spans)} colour tag(s)")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``richcopy`` console script.

    Commands:
        render <path>   Render Markdown/HTML to HTML with colour spans
        check <path>    Report colour tags; exit 1 on stray openers
    """
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    setup_logging()

    match args.command:
        case "render":
            _cmd_render(args.path, args.source_format, args.output)
        case "check":
            code = _cmd_check(args.path, args.source_format)
            if code:
                sys.exit(code)


if __name__ == "__main__":
    main()
