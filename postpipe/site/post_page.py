"""Single post page addressed by the ``file`` query parameter."""

from collections.abc import Callable

from postpipe.content.frontmatter import FrontMatterParser
from postpipe.site.errors import LoadError, MissingParameterError, PostPipeError
from postpipe.site.formatting import format_date, get_post_file
from postpipe.site.loader import PostLoader
from postpipe.site.render import MarkdownRenderer
from postpipe.site.views import DEFAULT_POST_TITLE, ErrorView, PostView
from postpipe.utils.mixins import LoggerMixin

Render = Callable[[str], str]


class PostPageController(LoggerMixin):
    """Loads, parses and renders one post, or produces an error view."""

    def __init__(
        self,
        loader: PostLoader,
        render: Render | None = None,
        parser: FrontMatterParser | None = None,
        site_title: str = "Blog",
    ):
        self.loader = loader
        self.render = render or MarkdownRenderer()
        self.parser = parser or FrontMatterParser()
        self.site_title = site_title

    async def load(self, url: str) -> PostView | ErrorView:
        try:
            file = get_post_file(url)
            if file is None:
                raise MissingParameterError()
            return await self.load_post(file)
        except MissingParameterError as e:
            self.logger.warning("Post page opened without a file", url=url)
            return ErrorView(message=self.error_message(e))
        except PostPipeError as e:
            self.logger.error("Failed to load post", url=url, error=str(e))
            return ErrorView(message=self.error_message(e))

    async def load_post(self, file: str) -> PostView:
        """Fetch and render ``file``; load failures propagate."""
        raw = await self.loader.load_document(file)
        parsed = self.parser.parse(raw)

        title = parsed.get_text("title")
        date = parsed.get_text("date")

        return PostView(
            file=file,
            title=title or DEFAULT_POST_TITLE,
            document_title=f"{title or 'Post'} - {self.site_title}",
            date_label=format_date(date) if date else "",
            category=parsed.get_text("category"),
            tags=parsed.get_tags(),
            html=self.render(parsed.body),
        )

    @staticmethod
    def error_message(error: PostPipeError) -> str:
        if isinstance(error, MissingParameterError):
            return "No post file was specified."
        if isinstance(error, LoadError):
            return str(error)
        return "An unknown error occurred."
