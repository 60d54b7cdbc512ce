"""Pydantic v2 models for the FHEVM documentation generator.

Defines the tag vocabulary found in JSDoc-style test comments and the
hierarchical document model the tags are folded into before rendering.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TagKind(str, Enum):
    """Documentation tags understood by the aggregator."""
    TITLE = "title"
    PURPOSE = "purpose"
    CHAPTER = "chapter"
    EXAMPLE = "example"
    NOTE = "note"


# ---------------------------------------------------------------------------
# Comment Models
# ---------------------------------------------------------------------------

class Tag(BaseModel):
    """A single ``@name value`` annotation inside a block comment."""
    name: str = Field(..., description="Tag name without the leading '@'")
    value: str = Field(default="", description="Trimmed tag text")

    @property
    def kind(self) -> Optional[TagKind]:
        """The matching ``TagKind``, or ``None`` for tags outside the vocabulary."""
        try:
            return TagKind(self.name)
        except ValueError:
            return None


class BlockComment(BaseModel):
    """One ``/** ... */`` comment: its tags in order plus any leading free text."""
    tags: list[Tag] = Field(default_factory=list, description="Tags in order of appearance")
    description: Optional[str] = Field(
        default=None, description="Free text preceding the first tag"
    )


# ---------------------------------------------------------------------------
# Document Model
# ---------------------------------------------------------------------------

class ChapterContent(BaseModel):
    """Examples and notes collected under one chapter."""
    examples: list[str] = Field(default_factory=list, description="Example titles")
    notes: list[str] = Field(default_factory=list, description="Chapter notes")


class ParsedDocs(BaseModel):
    """Aggregated documentation for a single example project.

    ``chapters`` relies on ``dict`` insertion order: chapters are rendered in
    the order they were first declared.
    """
    title: Optional[str] = Field(default=None, description="First @title seen")
    purpose: Optional[str] = Field(default=None, description="First @purpose seen")
    chapters: dict[str, ChapterContent] = Field(
        default_factory=dict, description="Chapters keyed by name, first-seen order"
    )
    general_notes: list[str] = Field(
        default_factory=list, description="Notes seen before any chapter"
    )

    def is_empty(self) -> bool:
        """Return ``True`` when no tag contributed anything."""
        return (
            self.title is None
            and self.purpose is None
            and not self.chapters
            and not self.general_notes
        )
