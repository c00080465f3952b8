"""Build-time generation of the post index."""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog
from dateutil import parser as date_parser

from postpipe.config import Settings, get_settings
from postpipe.content.excerpt import ExcerptGenerator
from postpipe.content.frontmatter import FrontMatterParser
from postpipe.content.models import MARKDOWN_EXTENSION, Document, PostSummary
from postpipe.content.storage import DirectoryDocumentSource, IndexWriter

logger = structlog.get_logger(__name__)

# Shared sort key for dates that do not parse; ranks below every real date
INVALID_DATE_KEY: tuple[int, float] = (0, 0.0)


def utc_today() -> str:
    return datetime.now(UTC).date().isoformat()


def parse_post_date(value: str) -> datetime | None:
    """Parse an ISO-ish date string, or return None if it is not a date.

    Naive values are taken as UTC so date-only and datetime strings compare
    on one timeline.
    """
    if not value:
        return None

    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def date_sort_key(post: PostSummary) -> tuple[int, float]:
    """Newest-first sort key.

    Every unparseable date maps to the same key, ranked below all real dates,
    so invalid dates keep their pre-sort order at the end of the list. This
    differs from a NaN comparison, which gives no total order.
    """
    parsed = parse_post_date(post.date)
    if parsed is None:
        return INVALID_DATE_KEY
    return (1, parsed.timestamp())


class PostIndexBuilder:
    """Turns markdown documents into the sorted list of post summaries."""

    def __init__(
        self,
        parser: FrontMatterParser | None = None,
        excerpt_generator: ExcerptGenerator | None = None,
        today: Callable[[], str] = utc_today,
    ):
        self.parser = parser or FrontMatterParser()
        self.excerpt_generator = excerpt_generator or ExcerptGenerator()
        self.today = today

    def build(self, documents: Iterable[Document] | None) -> list[PostSummary]:
        if not documents:
            return []

        # Reverse file-name order approximates newest-first for date-prefixed
        # names and is the tie-break for equal or unparseable dates.
        selected = sorted(
            (doc for doc in documents if doc.is_markdown),
            key=lambda doc: doc.file,
            reverse=True,
        )

        build_date = self.today()
        posts = [self.summarize(doc, build_date) for doc in selected]

        # list.sort is stable, also with reverse=True
        posts.sort(key=date_sort_key, reverse=True)
        return posts

    def summarize(
        self, document: Document, build_date: str | None = None
    ) -> PostSummary:
        parsed = self.parser.parse(document.text)

        return PostSummary(
            file=document.file,
            title=parsed.get_text("title")
            or document.file.replace(MARKDOWN_EXTENSION, "", 1),
            date=parsed.get_text("date") or build_date or self.today(),
            tags=parsed.get_tags(),
            category=parsed.get_text("category"),
            description=parsed.get_text("description"),
            excerpt=self.excerpt_generator.excerpt(parsed.body),
        )


async def build_index(settings: Settings | None = None) -> list[PostSummary]:
    """Read the pages directory, build the index and write it out."""
    settings = settings or get_settings()

    source = DirectoryDocumentSource(settings.pages_dir)
    builder = PostIndexBuilder(
        excerpt_generator=ExcerptGenerator(max_length=settings.excerpt_length)
    )
    writer = IndexWriter(settings.output_file)

    documents = await source.load()
    if documents is None:
        logger.warning(
            "Pages directory not found, writing empty index",
            pages_dir=str(settings.pages_dir),
        )

    posts = builder.build(documents)
    await writer.write(posts)

    logger.info(
        "Generated post index",
        output_file=str(settings.output_file),
        post_count=len(posts),
    )
    return posts
