"""JSDoc-style tag extraction for FHEVM test sources.

Splits TypeScript source text into ``/** ... */`` block comments and parses
each one into an ordered list of tags plus its leading free-text description.
Uses pure regex parsing; the surrounding TypeScript is never interpreted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from .models import BlockComment, Tag


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BLOCK_COMMENT_PATTERN = re.compile(r"/\*\*(?!/)(.*?)\*/", re.DOTALL)
_GUTTER_PATTERN = re.compile(r"^\s*\*?[ \t]?")
_TAG_LINE_PATTERN = re.compile(r"^@(\S*)[ \t]*(.*)$")
_TAG_NAME_PATTERN = re.compile(r"^[A-Za-z][\w-]*$")
_QUOTES = ('"', "'")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _strip_gutter(line: str) -> str:
    """Remove leading indentation and the ``*`` gutter from a comment line."""
    return _GUTTER_PATTERN.sub("", line, count=1).rstrip()


def _unquote(value: str) -> str:
    """Drop one pair of matching quotes wrapping the whole value."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1].strip()
    return value


def _tag_value(first_line: str, continuation: list[str]) -> str:
    """Join the inline name token, its description and continuation lines."""
    parts = first_line.split(None, 1)
    value = " ".join(parts)
    if continuation:
        value = "\n".join([value, *continuation])
    return _unquote(value.strip())


class _TagBuffer:
    """Accumulates the lines of the tag currently being read."""

    __slots__ = ("name", "first_line", "continuation")

    def __init__(self, name: str, first_line: str) -> None:
        self.name = name
        self.first_line = first_line
        self.continuation: list[str] = []

    def to_tag(self) -> Tag:
        # Trailing blank lines separate tags; they are not part of the value.
        while self.continuation and not self.continuation[-1].strip():
            self.continuation.pop()
        return Tag(name=self.name, value=_tag_value(self.first_line, self.continuation))


def parse_comment_body(body: str) -> BlockComment:
    """Parse the text between ``/**`` and ``*/`` into a ``BlockComment``.

    Lines before the first tag form the description. A line starting with
    ``@`` but lacking a valid tag name is dropped and ends the previous
    tag's continuation.
    """
    description_lines: list[str] = []
    tags: list[Tag] = []
    current: _TagBuffer | None = None
    seen_tag_line = False

    for raw_line in body.splitlines():
        line = _strip_gutter(raw_line)
        stripped = line.strip()
        tag_match = _TAG_LINE_PATTERN.match(stripped)

        if tag_match:
            seen_tag_line = True
            if current is not None:
                tags.append(current.to_tag())
                current = None
            name = tag_match.group(1)
            if _TAG_NAME_PATTERN.match(name):
                current = _TagBuffer(name, tag_match.group(2))
            continue

        if current is not None:
            current.continuation.append(stripped)
        elif not seen_tag_line:
            description_lines.append(stripped)

    if current is not None:
        tags.append(current.to_tag())

    description = "\n".join(description_lines).strip()
    return BlockComment(tags=tags, description=description or None)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_block_comments(text: str) -> list[BlockComment]:
    """Return every ``/** ... */`` comment in *text*, in textual order.

    Ordinary ``/* ... */`` and ``//`` comments are ignored. Comments that
    contain no recognisable tags still appear in the result with an empty
    ``tags`` list so that their description can be used.
    """
    return [parse_comment_body(m.group(1)) for m in _BLOCK_COMMENT_PATTERN.finditer(text)]


def iter_tags(comments: Iterable[BlockComment]) -> Iterator[Tag]:
    """Flatten *comments* into a single ordered tag stream."""
    for comment in comments:
        yield from comment.tags
