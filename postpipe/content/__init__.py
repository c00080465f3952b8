"""Build-time content pipeline: front matter, excerpts and the post index."""

from postpipe.content.excerpt import ExcerptGenerator
from postpipe.content.frontmatter import FrontMatterParser, parse_front_matter
from postpipe.content.index_builder import PostIndexBuilder, build_index
from postpipe.content.models import Document, ParsedDocument, PostSummary
from postpipe.content.storage import DirectoryDocumentSource, IndexWriter

__all__ = [
    "DirectoryDocumentSource",
    "Document",
    "ExcerptGenerator",
    "FrontMatterParser",
    "IndexWriter",
    "ParsedDocument",
    "PostIndexBuilder",
    "PostSummary",
    "build_index",
    "parse_front_matter",
]
