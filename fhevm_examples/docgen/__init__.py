"""FHEVM documentation generator.

Extracts ``@title``/``@purpose``/``@chapter``/``@example``/``@note`` tags from
an example's TypeScript tests and renders them into the example's README.

Usage::

    from fhevm_examples.docgen import parse_documentation, render_readme

    docs = await parse_documentation("scaffolded/basic-counter/test")
    markdown = render_readme(docs, "basic-counter")
"""

from fhevm_examples.docgen.aggregator import (
    aggregate_comments,
    aggregate_sources,
    parse_documentation,
)
from fhevm_examples.docgen.extractor import extract_block_comments
from fhevm_examples.docgen.models import (
    BlockComment,
    ChapterContent,
    ParsedDocs,
    Tag,
    TagKind,
)
from fhevm_examples.docgen.renderer import ReadmeGenerator, render_readme

__all__ = [
    "parse_documentation",
    "aggregate_comments",
    "aggregate_sources",
    "extract_block_comments",
    "render_readme",
    "ReadmeGenerator",
    "BlockComment",
    "ChapterContent",
    "ParsedDocs",
    "Tag",
    "TagKind",
]
