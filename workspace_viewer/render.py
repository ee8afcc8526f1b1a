from __future__ import annotations

import markdown
from markdown.extensions import Extension
from markdown.extensions.codehilite import CodeHiliteExtension
from markdown.extensions.fenced_code import FencedCodeExtension
from markdown.extensions.tables import TableExtension
from pygments.formatters import HtmlFormatter
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound


CODE_CSS_CLASS = "codehilite"


def _extensions() -> list[Extension]:
    # guess_lang: unknown or missing fence languages fall back to lexer guessing,
    # and codehilite drops to plain text when guessing fails.
    return [
        FencedCodeExtension(),
        CodeHiliteExtension(css_class=CODE_CSS_CLASS, guess_lang=True, use_pygments=True),
        TableExtension(),
    ]


def render_markdown(text: str) -> str:
    """Render markdown to HTML with Pygments highlighted code blocks."""
    md = markdown.Markdown(extensions=_extensions(), output_format="html")
    return md.convert(text)


def highlight_css(style: str = "default") -> str:
    """Stylesheet for the `.codehilite` blocks produced by `render_markdown`."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = "default"
    return HtmlFormatter(style=style).get_style_defs(f".{CODE_CSS_CLASS}")
