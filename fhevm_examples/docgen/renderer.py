"""README generator for scaffolded FHEVM examples.

Turns a ``ParsedDocs`` model into a GitBook-compatible ``README.md``. The
rendering is a pure function of its inputs: no timestamps, no file-system
lookups, so re-rendering the same docs yields byte-identical output.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .aggregator import parse_documentation
from .models import ParsedDocs

console = Console()


# ---------------------------------------------------------------------------
# Static content
# ---------------------------------------------------------------------------

README_FILENAME = "README.md"

_RUN_TESTS_BLOCK = [
    "```bash",
    "# Install dependencies",
    "npm ci",
    "",
    "# Run tests",
    "npm test",
    "",
    "# Or compile only",
    "npx hardhat compile",
    "```",
]

_GENERIC_TEACHINGS = [
    "- Core FHEVM functionality",
    "- Smart contract development with encrypted data",
    "- Testing patterns for FHE operations",
]

_RESOURCES = [
    "- [FHEVM Documentation](https://docs.zama.ai/fhevm)",
    "- [Hardhat Template](https://github.com/zama-ai/fhevm-hardhat-template)",
    "- [Zama Bounty Program](https://www.zama.org/post/bounty-track-december-2025-build-the-fhevm-example-hub)",
]

_CHAPTER_FALLBACK = "Core concepts and implementation"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_readme(docs: ParsedDocs, example_name: str) -> str:
    """Render *docs* as the README of the example called *example_name*."""
    sections: list[str] = []

    sections.append(f"# {docs.title or f'{example_name} Example'}")
    sections.append("")
    if docs.purpose:
        sections.append(docs.purpose)
    else:
        sections.append(
            f"This example demonstrates the {example_name} functionality in FHEVM."
        )
    sections.append("")

    for chapter_name, content in docs.chapters.items():
        sections.append(f"## {chapter_name}")
        sections.append("")
        for example in content.examples:
            sections.append(f"### {example}")
            sections.append("")
        for note in content.notes:
            sections.append(f"> **Note:** {note}")
            sections.append("")

    if docs.general_notes:
        sections.append("## Notes")
        sections.append("")
        for note in docs.general_notes:
            sections.append(f"> {note}")
            sections.append("")

    sections.append("## How to Run Tests")
    sections.append("")
    sections.extend(_RUN_TESTS_BLOCK)
    sections.append("")

    sections.append("## What This Example Teaches")
    sections.append("")
    if docs.purpose:
        sections.append(docs.purpose)
        sections.append("")
    sections.append("This example demonstrates:")
    sections.append("")
    if docs.chapters:
        for chapter_name, content in docs.chapters.items():
            summary = ", ".join(content.examples) if content.examples else _CHAPTER_FALLBACK
            sections.append(f"- **{chapter_name}**: {summary}")
    else:
        sections.extend(_GENERIC_TEACHINGS)
    sections.append("")

    sections.append("## Additional Resources")
    sections.append("")
    sections.extend(_RESOURCES)

    return "\n".join(sections) + "\n"


# ---------------------------------------------------------------------------
# ReadmeGenerator
# ---------------------------------------------------------------------------

class ReadmeGenerator:
    """Generates ``README.md`` for a scaffolded example from its test comments.

    Usage::

        generator = ReadmeGenerator()
        readme = await generator.generate("scaffolded/basic-counter", "basic-counter")
        if readme is None:
            ...  # reported on the console, caller decides how to continue
    """

    def __init__(self, test_subdir: str = "test") -> None:
        self.test_subdir = test_subdir

    async def generate(
        self,
        example_dir: str | Path,
        example_name: str,
    ) -> Optional[Path]:
        """Parse the example's tests and write its README.

        Returns the README path, or ``None`` when reading or writing failed.
        """
        root = Path(example_dir)
        try:
            console.print("      Parsing test files for documentation...")
            docs = await parse_documentation(root / self.test_subdir)
            content = render_readme(docs, example_name)
            readme_path = root / README_FILENAME
            await asyncio.to_thread(readme_path.write_text, content, "utf-8")
        except (OSError, UnicodeError) as exc:
            console.print(f"      [red]Failed to generate docs: {escape(str(exc))}[/red]")
            return None

        console.print(f"      [green]Generated {README_FILENAME}[/green]")
        return readme_path
