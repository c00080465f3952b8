"""Filesystem I/O for the build step."""

import json
from pathlib import Path

import aiofiles
import structlog

from postpipe.content.models import MARKDOWN_EXTENSION, Document, PostSummary
from postpipe.utils.error_handler import critical_operation

logger = structlog.get_logger(__name__)


class DirectoryDocumentSource:
    """Reads markdown documents from a pages directory."""

    def __init__(self, pages_dir: Path):
        self.pages_dir = pages_dir

    def list_files(self) -> list[Path]:
        return [
            path
            for path in self.pages_dir.iterdir()
            if path.is_file() and path.name.endswith(MARKDOWN_EXTENSION)
        ]

    async def load(self) -> list[Document] | None:
        """Load every markdown file; None when the directory does not exist."""
        if not self.pages_dir.is_dir():
            return None

        documents = []
        for path in self.list_files():
            async with aiofiles.open(path, encoding="utf-8") as f:
                text = await f.read()
            documents.append(Document(file=path.name, text=text))

        logger.debug(
            "Loaded documents",
            pages_dir=str(self.pages_dir),
            count=len(documents),
        )
        return documents


class IndexWriter:
    """Serializes the post index as pretty-printed JSON."""

    def __init__(self, output_file: Path):
        self.output_file = output_file

    @staticmethod
    def serialize(posts: list[PostSummary]) -> str:
        return json.dumps(
            [post.to_dict() for post in posts], indent=2, ensure_ascii=False
        )

    @critical_operation("write post index", exceptions=(OSError,))
    async def write(self, posts: list[PostSummary]) -> Path:
        self.output_file.parent.mkdir(parents=True, exist_ok=True)

        content = self.serialize(posts)
        async with aiofiles.open(self.output_file, "w", encoding="utf-8") as f:
            await f.write(content)

        logger.debug(
            "Index written", output_file=str(self.output_file), size=len(content)
        )
        return self.output_file
