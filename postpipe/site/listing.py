"""Post list page: index loading, tag filter bar and search wiring."""

from collections.abc import Callable

from postpipe.config import Settings, get_settings
from postpipe.content.models import PostSummary
from postpipe.search.debounce import Scheduler
from postpipe.search.engine import (
    ALL_TAGS,
    DEFAULT_DEBOUNCE_SECONDS,
    SearchFilterEngine,
)
from postpipe.site.loader import PostLoader
from postpipe.site.views import ListingView, PostCard
from postpipe.utils.mixins import LoggerMixin

ViewCallback = Callable[[ListingView], None]


def collect_tags(posts: list[PostSummary]) -> list[str]:
    """Sorted set of every tag used by ``posts``."""
    return sorted({tag for post in posts for tag in post.tags})


class ListingController(LoggerMixin):
    """Owns the search engine for one list page and turns results into views.

    UI toolkits adapt their events to ``on_tag_selected``,
    ``on_query_changed`` and ``clear``; every change is published through
    ``on_view``.
    """

    def __init__(
        self,
        loader: PostLoader,
        on_view: ViewCallback | None = None,
        scheduler: Scheduler | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.loader = loader
        self.on_view = on_view
        self.engine = SearchFilterEngine(
            render=self.render_posts,
            scheduler=scheduler,
            debounce_seconds=debounce_seconds,
        )
        self.tags: list[str] = []
        self.active_tag = ALL_TAGS
        self.view = ListingView(loading=True)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        on_view: ViewCallback | None = None,
        scheduler: Scheduler | None = None,
    ) -> "ListingController":
        settings = settings or get_settings()
        return cls(
            PostLoader.from_settings(settings),
            on_view=on_view,
            scheduler=scheduler,
            debounce_seconds=settings.search_debounce_seconds,
        )

    async def start(self) -> ListingView:
        """Load the index and render the full list."""
        self._publish(ListingView(loading=True))

        posts = await self.loader.load_index()
        self.engine.set_posts(posts)
        self.tags = collect_tags(posts)
        self.active_tag = ALL_TAGS

        self.render_posts(posts)
        if not posts:
            self.logger.info("Post index is empty")
        return self.view

    def render_posts(self, posts: list[PostSummary]) -> None:
        self._publish(
            ListingView(
                cards=[PostCard.from_summary(post) for post in posts],
                tags=self.tags,
                active_tag=self.active_tag,
            )
        )

    def on_tag_selected(self, tag: str | None) -> None:
        self.active_tag = tag or ALL_TAGS
        self.engine.on_tag_selected(self.active_tag)

    def on_query_changed(self, text: str) -> None:
        self.engine.on_query_changed(text)

    def clear(self) -> None:
        self.engine.clear()

    def _publish(self, view: ListingView) -> None:
        self.view = view
        if self.on_view is not None:
            self.on_view(view)
