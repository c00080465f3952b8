"""Plain-text excerpts derived from markdown bodies.

This is a textual heuristic, not a markdown parser. Each pass works on the
output of the previous one, so the order of ``STRIP_PASSES`` matters.
"""

import re

DEFAULT_EXCERPT_LENGTH = 200
CONTINUATION_MARKER = "..."

# "." must not cross any line terminator
_LINE = r"[^\n\r\u2028\u2029]"

STRIP_PASSES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("heading", re.compile(rf"#{_LINE}*")),
    ("code_block", re.compile(r"```.*?```", re.DOTALL)),
    ("bracketed", re.compile(r"\[.*?\]", re.DOTALL)),
    ("bold", re.compile(rf"\*\*{_LINE}*\*\*")),
    ("italic", re.compile(rf"\*{_LINE}*\*")),
)
LINE_BREAKS = re.compile(r"[\r\n]+")


class ExcerptGenerator:
    """Builds a bounded plain-text summary of a markdown body."""

    def __init__(self, max_length: int = DEFAULT_EXCERPT_LENGTH):
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self.max_length = max_length

    def strip_markdown(self, body: str) -> str:
        text = body
        for _name, pattern in STRIP_PASSES:
            text = pattern.sub("", text)
        return LINE_BREAKS.sub(" ", text).strip()

    def excerpt(self, body: str) -> str:
        text = self.strip_markdown(body)[: self.max_length].strip()

        # The marker is added only when the cap was actually hit
        if len(text) == self.max_length:
            return text + CONTINUATION_MARKER
        return text

    __call__ = excerpt


def make_excerpt(body: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    return ExcerptGenerator(max_length).excerpt(body)
