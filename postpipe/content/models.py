"""
Content pipeline data models
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MARKDOWN_EXTENSION = ".md"

# Metadata values are plain strings, except tags which may become a list
FrontMatter = dict[str, str | list[str]]


@dataclass(frozen=True)
class Document:
    """A raw source document, identified by its file name."""

    file: str
    text: str

    @property
    def is_markdown(self) -> bool:
        return self.file.endswith(MARKDOWN_EXTENSION)


@dataclass(frozen=True)
class ParsedDocument:
    """Front matter split from the markdown body."""

    metadata: FrontMatter = field(default_factory=dict)
    body: str = ""

    def get_text(self, key: str) -> str:
        """Return a metadata value only if it is a string."""
        value = self.metadata.get(key)
        return value if isinstance(value, str) else ""

    def get_tags(self) -> list[str]:
        """Return tags only if they parsed into a list."""
        value = self.metadata.get("tags")
        return list(value) if isinstance(value, list) else []


class PostSummary(BaseModel):
    """One entry of the serialized post index"""

    model_config = ConfigDict(frozen=True)

    file: str
    title: str
    date: str
    tags: list[str] = Field(default_factory=list)
    category: str = ""
    description: str = ""
    excerpt: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, value: Any) -> list[str]:
        """Anything other than a list of tags means no tags."""
        if not isinstance(value, list | tuple):
            return []
        return [str(tag) for tag in value]

    @field_validator("category", "description", "excerpt", mode="before")
    @classmethod
    def coerce_optional_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        """Convert to the serialized index representation."""
        return self.model_dump(mode="json")
