"""View models handed to the rendering layer."""

from dataclasses import dataclass, field

from postpipe.content.models import PostSummary
from postpipe.site.formatting import INDEX_PAGE, format_date, post_href

DEFAULT_POST_TITLE = "Untitled"
ERROR_TITLE = "Error"


@dataclass(frozen=True)
class PostCard:
    """One entry in the post list."""

    file: str
    href: str
    title: str
    date_label: str
    category: str
    summary: str
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_summary(cls, post: PostSummary) -> "PostCard":
        return cls(
            file=post.file,
            href=post_href(post.file),
            title=post.title,
            date_label=format_date(post.date),
            category=post.category,
            summary=post.excerpt or post.description,
            tags=list(post.tags),
        )


@dataclass(frozen=True)
class ListingView:
    """The post list plus the tag filter bar."""

    cards: list[PostCard] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    active_tag: str = "all"
    loading: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.cards

    @property
    def show_tag_filter(self) -> bool:
        return bool(self.tags)


@dataclass(frozen=True)
class PostView:
    """A fully loaded post page."""

    file: str
    title: str
    document_title: str
    date_label: str
    category: str
    tags: list[str]
    html: str


@dataclass(frozen=True)
class ErrorView:
    """User-visible error state with a way back to the list."""

    message: str
    title: str = ERROR_TITLE
    back_href: str = INDEX_PAGE
    back_label: str = "Back to posts"
