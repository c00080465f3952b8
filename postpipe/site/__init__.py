"""Runtime side of the blog: loading, list and post pages, theme."""

from postpipe.site.errors import (
    DocumentLoadError,
    IndexLoadError,
    LoadError,
    MissingParameterError,
    PostPipeError,
)
from postpipe.site.listing import ListingController
from postpipe.site.loader import PostLoader
from postpipe.site.post_page import PostPageController
from postpipe.site.render import MarkdownRenderer
from postpipe.site.theme import ThemeChange, ThemeStore
from postpipe.site.views import ErrorView, ListingView, PostCard, PostView

__all__ = [
    "DocumentLoadError",
    "ErrorView",
    "IndexLoadError",
    "ListingController",
    "ListingView",
    "LoadError",
    "MarkdownRenderer",
    "MissingParameterError",
    "PostCard",
    "PostLoader",
    "PostPageController",
    "PostPipeError",
    "PostView",
    "ThemeChange",
    "ThemeStore",
]
