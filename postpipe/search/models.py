"""Search-related data models."""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from postpipe.content.models import PostSummary

WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Case-fold, trim and collapse whitespace runs to one space."""
    if not text:
        return ""
    return WHITESPACE_RUN.sub(" ", text.casefold().strip())


def searchable_fields(post: PostSummary) -> Iterator[str]:
    yield post.title
    yield post.description
    yield post.excerpt
    yield from post.tags
    yield post.category


def post_matches(post: PostSummary, normalized_query: str) -> bool:
    """True if the query is a substring of any searchable field."""
    return any(
        normalized_query in normalize_text(value) for value in searchable_fields(post)
    )


@dataclass
class SearchState:
    """Inputs to the visible-post derivation."""

    all_posts: list[PostSummary] = field(default_factory=list)
    tag_restriction: list[PostSummary] = field(default_factory=list)
    query_text: str = ""

    @property
    def base_posts(self) -> list[PostSummary]:
        return self.tag_restriction if self.tag_restriction else self.all_posts

    @property
    def normalized_query(self) -> str:
        return normalize_text(self.query_text)

    @property
    def has_query(self) -> bool:
        return bool(self.normalized_query)
