"""Markdown to HTML rendering with code highlighting."""

import html

import markdown

from postpipe.utils.mixins import LoggerMixin

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "nl2br", "toc", "codehilite"]
EXTENSION_CONFIGS = {
    "codehilite": {"guess_lang": False, "css_class": "highlight"},
}


class MarkdownRenderer(LoggerMixin):
    """``render(markdown) -> html`` with GFM-style line breaks.

    Fenced code blocks are highlighted by Pygments through ``codehilite``.
    """

    def __init__(self) -> None:
        self._md = markdown.Markdown(
            extensions=MARKDOWN_EXTENSIONS, extension_configs=EXTENSION_CONFIGS
        )

    def render(self, source: str) -> str:
        try:
            return self._md.reset().convert(source)
        except Exception as e:
            self.logger.warning(
                "Markdown rendering failed, using plain text", error=str(e)
            )
            return plain_text_html(source)

    __call__ = render


def plain_text_html(source: str) -> str:
    """Escape markup and keep line breaks."""
    escaped = html.escape(source, quote=False)
    return escaped.replace("\n", "<br>")
