"""GitBook documentation generator.

Collects the ``README.md`` of every scaffolded example into a ``docs/``
directory (one page per example) and renders a ``SUMMARY.md`` table of
contents grouped by example category.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from fhevm_examples.scaffolder.catalog import UNCATEGORIZED
from fhevm_examples.scaffolder.templates import TemplateRenderer

console = Console()


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class GitBookPage(BaseModel):
    """One example page inside the GitBook."""

    name: str = Field(..., description="Example name, e.g. 'basic-counter'")
    title: str = Field(..., description="Page title taken from the README heading")
    category: str = Field(default=UNCATEGORIZED)
    filename: str = Field(..., description="Page filename relative to docs/")


class GitBookResult(BaseModel):
    """Everything written by :meth:`GitBookGenerator.generate`."""

    docs_dir: str
    pages: list[GitBookPage] = Field(default_factory=list)
    summary_path: str = ""


# ---------------------------------------------------------------------------
# GitBookGenerator
# ---------------------------------------------------------------------------

class GitBookGenerator:
    """Builds a GitBook ``docs/`` tree from scaffolded example READMEs.

    Usage::

        generator = GitBookGenerator()
        result = await generator.generate("scaffolded", "docs", {"basic-counter": "getting-started"})
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def generate(
        self,
        scaffolded_dir: str | Path,
        docs_dir: str | Path,
        categories: dict[str, str] | None = None,
    ) -> GitBookResult:
        """Copy every example README into *docs_dir* and write the index.

        Parameters
        ----------
        scaffolded_dir:
            Directory holding one sub-directory per scaffolded example.
        docs_dir:
            Destination directory; created if missing.
        categories:
            ``{example name: category}``. Unknown examples are grouped under
            ``uncategorized``.
        """
        source_root = Path(scaffolded_dir)
        docs_root = Path(docs_dir)
        await asyncio.to_thread(docs_root.mkdir, parents=True, exist_ok=True)
        categories = categories or {}

        pages: list[GitBookPage] = []
        example_dirs = sorted(p for p in source_root.iterdir() if p.is_dir()) if source_root.is_dir() else []
        for example_dir in example_dirs:
            readme = example_dir / "README.md"
            if not readme.is_file():
                continue
            name = example_dir.name
            filename = f"{name}.md"
            try:
                content = await asyncio.to_thread(readme.read_text, "utf-8")
                await asyncio.to_thread(shutil.copyfile, readme, docs_root / filename)
            except (OSError, UnicodeDecodeError) as exc:
                console.print(f"[yellow]Skipped {escape(name)}: {escape(str(exc))}[/yellow]")
                continue
            pages.append(
                GitBookPage(
                    name=name,
                    title=_readme_title(content, name),
                    category=categories.get(name, UNCATEGORIZED),
                    filename=filename,
                )
            )
            console.print(f"[green]+[/green] Copied: {filename}")

        groups = _group_by_category(pages, categories)
        context = {"groups": groups}
        summary_path = await self.renderer.render_to_file(
            "gitbook/SUMMARY.md.j2", docs_root / "SUMMARY.md", context
        )
        await self.renderer.render_to_file(
            "gitbook/README.md.j2", docs_root / "README.md", context
        )

        console.print(f"\nGenerated {len(pages)} documentation files in {docs_root}")
        return GitBookResult(
            docs_dir=str(docs_root),
            pages=pages,
            summary_path=str(summary_path),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _readme_title(content: str, fallback: str) -> str:
    """Return the first level-1 heading of *content*, else *fallback*."""
    for line in content.splitlines():
        if line.startswith("# "):
            return line[2:].strip() or fallback
    return fallback


def _group_by_category(
    pages: list[GitBookPage],
    categories: dict[str, str],
) -> list[tuple[str, list[GitBookPage]]]:
    """Group pages by category.

    Categories follow their first appearance in *categories* (catalog order),
    with ``uncategorized`` last.
    """
    grouped: dict[str, list[GitBookPage]] = {}
    for page in pages:
        grouped.setdefault(page.category, []).append(page)

    order = [c for c in dict.fromkeys(categories.values()) if c != UNCATEGORIZED]
    order.append(UNCATEGORIZED)
    return [(category, grouped[category]) for category in order if category in grouped]
