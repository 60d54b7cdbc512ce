"""Fold documentation tags into a ``ParsedDocs`` model.

The aggregation is a left fold over the tag stream of every test file of an
example, with the ``ParsedDocs`` under construction as the accumulator.
``@example`` and ``@note`` always attach to the most recently *added* chapter
(the last key of ``chapters``), whichever comment or file they appear in.
Declaring an existing chapter again neither moves it nor makes it current.

Usage::

    from fhevm_examples.docgen import parse_documentation

    docs = await parse_documentation("scaffolded/basic-counter/test")
    print(list(docs.chapters))
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from functools import reduce
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .extractor import extract_block_comments
from .models import BlockComment, ChapterContent, ParsedDocs, Tag, TagKind

console = Console()


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_CHAPTER = "Examples"
TEST_FILE_GLOB = "*.ts"


# ---------------------------------------------------------------------------
# Fold
# ---------------------------------------------------------------------------

def _last_chapter(docs: ParsedDocs) -> Optional[ChapterContent]:
    """The chapter inserted last, or ``None`` before any chapter exists."""
    if not docs.chapters:
        return None
    return docs.chapters[next(reversed(docs.chapters))]


def _fold_tag(docs: ParsedDocs, tag: Tag) -> ParsedDocs:
    """Apply one tag to the accumulator. Unknown tags pass through untouched."""
    kind = tag.kind

    if kind is TagKind.TITLE:
        if docs.title is None:
            docs.title = tag.value
    elif kind is TagKind.PURPOSE:
        if docs.purpose is None:
            docs.purpose = tag.value
    elif kind is TagKind.CHAPTER:
        docs.chapters.setdefault(tag.value, ChapterContent())
    elif kind is TagKind.EXAMPLE:
        chapter = _last_chapter(docs)
        if chapter is None:
            chapter = docs.chapters.setdefault(DEFAULT_CHAPTER, ChapterContent())
        chapter.examples.append(tag.value)
    elif kind is TagKind.NOTE:
        chapter = _last_chapter(docs)
        if chapter is None:
            docs.general_notes.append(tag.value)
        else:
            chapter.notes.append(tag.value)

    return docs


def _fold_comment(docs: ParsedDocs, comment: BlockComment) -> ParsedDocs:
    docs = reduce(_fold_tag, comment.tags, docs)
    # The free text of a comment only counts when no purpose is known yet.
    if comment.description and docs.purpose is None:
        docs.purpose = comment.description
    return docs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def aggregate_comments(comments: Iterable[BlockComment]) -> ParsedDocs:
    """Fold an ordered comment sequence into a fresh ``ParsedDocs``."""
    return reduce(_fold_comment, comments, ParsedDocs())


def aggregate_sources(sources: Iterable[str]) -> ParsedDocs:
    """Fold the comments of several source texts, in the order given."""
    comments = (
        comment
        for text in sources
        for comment in extract_block_comments(text)
    )
    return aggregate_comments(comments)


def discover_test_files(test_dir: str | Path) -> list[Path]:
    """Return every ``*.ts`` file below *test_dir*, sorted by relative path.

    Sorting makes first-wins and chapter ordering independent of the
    file-system listing order. A missing directory yields an empty list.
    """
    root = Path(test_dir)
    if not root.is_dir():
        return []
    files = [p for p in root.rglob(TEST_FILE_GLOB) if p.is_file()]
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


async def _read_source(path: Path) -> Optional[str]:
    """Read one test file; unreadable files are reported and skipped."""
    try:
        return await asyncio.to_thread(path.read_text, "utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[yellow]Skipping unreadable test file {path}: {escape(str(exc))}[/yellow]")
        return None


async def parse_documentation(test_dir: str | Path) -> ParsedDocs:
    """Discover, read and aggregate the test sources of one example.

    Args:
        test_dir: Directory holding the example's TypeScript tests.

    Returns:
        A ``ParsedDocs`` built from every readable file in sorted order.
        An empty model is returned when no test file is found.
    """
    files = discover_test_files(test_dir)
    console.print(f"      Found {len(files)} test file(s)")
    contents = await asyncio.gather(*(_read_source(path) for path in files))
    return aggregate_sources(text for text in contents if text is not None)
