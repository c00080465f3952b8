"""Loading the post index and post documents from the content root."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import quote

import aiofiles
import aiohttp
from pydantic import ValidationError

from postpipe.config import Settings, get_settings
from postpipe.content.frontmatter import strip_bom
from postpipe.content.models import PostSummary
from postpipe.site.errors import DocumentLoadError, IndexLoadError, LoadError
from postpipe.utils.error_handler import safe_with_default
from postpipe.utils.logger import validate_safe_path
from postpipe.utils.mixins import LoggerMixin

ErrorFactory = Callable[[str], LoadError]


class PostLoader(LoggerMixin):
    """Fetches ``posts.json`` and raw markdown documents.

    The content root is either a local directory or an ``http(s)://`` base
    URL. Remote resources are fetched with aiohttp, local ones with aiofiles.
    """

    def __init__(
        self,
        content_root: str = ".",
        pages_dir: str | Path = "pages",
        index_name: str = "posts.json",
        timeout_seconds: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self.content_root = content_root
        self.pages_dir = Path(pages_dir)
        self.index_name = index_name
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.session = session

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PostLoader":
        settings = settings or get_settings()
        return cls(
            content_root=settings.content_root,
            pages_dir=settings.pages_dir,
            index_name=settings.index_name,
            timeout_seconds=settings.request_timeout_seconds,
        )

    @property
    def is_remote(self) -> bool:
        return self.content_root.startswith(("http://", "https://"))

    def index_location(self) -> str:
        if self.is_remote:
            return f"{self.content_root.rstrip('/')}/{quote(self.index_name)}"
        return str(Path(self.content_root) / self.index_name)

    def document_location(self, file: str) -> str:
        if self.is_remote:
            pages = self.pages_dir.as_posix().strip("/")
            return f"{self.content_root.rstrip('/')}/{pages}/{quote(file)}"
        return str(Path(self.content_root) / self.pages_dir / file)

    @safe_with_default("load post index", [], exceptions=(IndexLoadError,))
    async def load_index(self) -> list[PostSummary]:
        """Load the post index; failures degrade to an empty list."""
        location = self.index_location()

        if self.is_remote:
            status, text = await self._fetch_remote(location, IndexLoadError)
            if status != 200:
                raise IndexLoadError(f"HTTP error! status: {status}")
        else:
            text = await self._read_local(Path(location), IndexLoadError)

        try:
            records = json.loads(text)
        except ValueError as e:
            raise IndexLoadError(f"Invalid index JSON: {e}") from e

        if not isinstance(records, list):
            raise IndexLoadError("Index is not a list of posts")

        posts = self._validate_records(records)
        self.logger.info(
            "Post index loaded", location=location, post_count=len(posts)
        )
        return posts

    async def load_document(self, file: str) -> str:
        """Load one raw markdown document, BOM stripped.

        Raises:
            DocumentLoadError: the document is missing or the fetch failed
        """
        location = self.document_location(file)
        self.logger.debug("Loading post document", file=file, location=location)

        if self.is_remote:
            status, text = await self._fetch_remote(
                location, lambda reason: DocumentLoadError(file, reason)
            )
            if status != 200:
                raise DocumentLoadError(file, f"status {status}", status=status)
        else:
            pages_root = Path(self.content_root) / self.pages_dir
            try:
                path = validate_safe_path(location, pages_root)
            except ValueError as e:
                raise DocumentLoadError(file, str(e)) from e
            text = await self._read_local(
                path, lambda reason: DocumentLoadError(file, reason)
            )

        return strip_bom(text)

    async def _fetch_remote(
        self, url: str, error_factory: ErrorFactory
    ) -> tuple[int, str]:
        try:
            if self.session is not None:
                return await self._get(self.session, url)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._get(session, url)
        except TimeoutError as e:
            raise error_factory(f"timeout fetching {url}") from e
        except aiohttp.ClientError as e:
            raise error_factory(str(e)) from e

    async def _get(self, session: aiohttp.ClientSession, url: str) -> tuple[int, str]:
        async with session.get(url, timeout=self.timeout) as response:
            if response.status != 200:
                self.logger.warning(
                    "HTTP error when fetching content",
                    url=url,
                    status=response.status,
                )
                return response.status, ""
            return response.status, await response.text(encoding="utf-8")

    async def _read_local(self, path: Path, error_factory: ErrorFactory) -> str:
        if not path.is_file():
            raise error_factory(f"not found: {path}")
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise error_factory(str(e)) from e

    def _validate_records(self, records: list[Any]) -> list[PostSummary]:
        posts = []
        for position, record in enumerate(records):
            try:
                posts.append(PostSummary.model_validate(record))
            except ValidationError as e:
                self.logger.warning(
                    "Skipping malformed index entry",
                    position=position,
                    error=str(e),
                )
        return posts
