"""Client-side search and tag filtering over the loaded post index."""

from collections.abc import Callable, Iterable

from postpipe.content.models import PostSummary
from postpipe.search.debounce import Debouncer, LoopScheduler, Scheduler
from postpipe.search.models import SearchState, normalize_text, post_matches
from postpipe.utils.mixins import LoggerMixin

ALL_TAGS = "all"
DEFAULT_DEBOUNCE_SECONDS = 0.2

RenderCallback = Callable[[list[PostSummary]], None]


class SearchFilterEngine(LoggerMixin):
    """Holds the post collection, tag restriction and query text.

    The visible posts are always derived from those three inputs; results
    are handed to ``render`` whenever they change.
    """

    def __init__(
        self,
        render: RenderCallback | None = None,
        scheduler: Scheduler | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.render = render
        self.state = SearchState()
        self._debouncer = Debouncer(scheduler or LoopScheduler(), debounce_seconds)

    @property
    def all_posts(self) -> list[PostSummary]:
        return self.state.all_posts

    @property
    def base_posts(self) -> list[PostSummary]:
        return self.state.base_posts

    @property
    def visible_posts(self) -> list[PostSummary]:
        return self.search(self.state.query_text)

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def set_posts(self, posts: Iterable[PostSummary] | None) -> None:
        self.state.all_posts = list(posts or [])
        self.state.tag_restriction = []

    def set_tag_restriction(self, posts: Iterable[PostSummary] | None) -> None:
        """Restrict the base set; an empty restriction means all posts."""
        self.state.tag_restriction = list(posts or [])

        # Restriction changes win over a pending debounced search
        if self.state.has_query:
            self._debouncer.cancel()
            self._emit(self.visible_posts)

    def search(self, query: str | None) -> list[PostSummary]:
        normalized_query = normalize_text(query)
        base_posts = self.state.base_posts

        if not normalized_query:
            return base_posts

        return [post for post in base_posts if post_matches(post, normalized_query)]

    def on_query_changed(self, text: str) -> None:
        """Record new input and schedule a debounced recomputation."""
        self.state.query_text = text or ""
        self._debouncer.trigger(self._run_search)

    def on_tag_selected(self, tag: str | None) -> list[PostSummary]:
        """Switch the tag restriction and render once under the current query.

        A tag no post carries leaves the restriction empty, which means all
        posts.
        """
        if not tag or tag == ALL_TAGS:
            restriction: list[PostSummary] = []
        else:
            restriction = [post for post in self.state.all_posts if post.has_tag(tag)]

        self.state.tag_restriction = restriction
        self._debouncer.cancel()
        self._emit(self.visible_posts)

        self.logger.debug("Tag selected", tag=tag, matching=len(restriction))
        return restriction

    def clear(self) -> None:
        """Reset the query and show the base set without waiting."""
        self._debouncer.cancel()
        self.state.query_text = ""
        self._emit(self.state.base_posts)

    def _run_search(self) -> None:
        results = self.search(self.state.query_text)
        self.logger.debug(
            "Search completed",
            query=self.state.query_text,
            total_results=len(results),
        )
        self._emit(results)

    def _emit(self, posts: list[PostSummary]) -> None:
        if self.render is None:
            self.logger.warning("No renderer attached, dropping results")
            return
        self.render(posts)
