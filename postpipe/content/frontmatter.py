"""Front matter parsing for markdown posts."""

import json
import re
from typing import Any

import structlog

from postpipe.content.models import FrontMatter, ParsedDocument

logger = structlog.get_logger(__name__)

BYTE_ORDER_MARK = "\ufeff"

# Header block at offset 0: ---, lines, ---, then the body.
# Both \n and \r\n line endings are accepted.
FRONT_MATTER_PATTERN = re.compile(r"---\r?\n(.*?)\r?\n---\r?\n(.*)", re.DOTALL)
LINE_BREAK_PATTERN = re.compile(r"\r?\n")
EDGE_QUOTE_PATTERN = re.compile(r"^['\"]|['\"]$")

QUOTE_CHARS = ('"', "'")
LIST_KEYS = frozenset({"tags"})


def strip_bom(text: str) -> str:
    """Drop a single byte-order mark at the start of ``text``."""
    if text.startswith(BYTE_ORDER_MARK):
        return text[1:]
    return text


class FrontMatterParser:
    """Splits a markdown document into front matter metadata and body.

    Parsing never fails: a missing or malformed header yields empty metadata
    and the whole text as body, and malformed list values fall back to a
    comma split.
    """

    def parse(self, text: str) -> ParsedDocument:
        text = strip_bom(text)

        match = FRONT_MATTER_PATTERN.fullmatch(text)
        if not match:
            return ParsedDocument(metadata={}, body=text)

        header, body = match.group(1), match.group(2)
        return ParsedDocument(metadata=self.parse_header(header), body=body)

    def parse_header(self, header: str) -> FrontMatter:
        metadata: FrontMatter = {}

        for line in LINE_BREAK_PATTERN.split(header):
            colon_index = line.find(":")
            if colon_index <= 0:
                continue

            key = line[:colon_index].strip()
            value = line[colon_index + 1 :].strip()
            metadata[key] = self.parse_value(key, value)

        return metadata

    def parse_value(self, key: str, value: str) -> str | list[str]:
        value = _strip_quotes(value)

        if key in LIST_KEYS and value.startswith("[") and value.endswith("]"):
            return _parse_list(value)

        return value


def _strip_quotes(value: str) -> str:
    """Remove exactly one layer of matching quotes."""
    for quote in QUOTE_CHARS:
        if value.startswith(quote) and value.endswith(quote):
            return value[1:-1]
    return value


def _parse_list(value: str) -> list[str]:
    try:
        parsed: Any = json.loads(value)
    except (ValueError, RecursionError):
        logger.debug("Tag list is not valid JSON, splitting on commas", value=value)
        return [
            EDGE_QUOTE_PATTERN.sub("", item.strip()) for item in value[1:-1].split(",")
        ]

    if not isinstance(parsed, list):
        return []
    return [item if isinstance(item, str) else json.dumps(item) for item in parsed]


_default_parser = FrontMatterParser()


def parse_front_matter(text: str) -> ParsedDocument:
    """Parse ``text`` with a shared parser instance."""
    return _default_parser.parse(text)
