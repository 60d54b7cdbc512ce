"""Tests for the GitBook documentation generator (fhevm_examples.reporter.gitbook)."""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_examples.reporter.gitbook import (
    GitBookGenerator,
    GitBookPage,
    _group_by_category,
    _readme_title,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def scaffolded(tmp_path: Path) -> Path:
    root = tmp_path / "scaffolded"
    for name, readme in (
        ("basic-counter", "# Basic Counter\n\nbody\n"),
        ("arithmetic", "# Encrypted Arithmetic\n"),
        ("zeta", "no heading here\n"),
    ):
        (root / name).mkdir(parents=True)
        (root / name / "README.md").write_text(readme, encoding="utf-8")
    (root / "no-readme").mkdir()
    (root / "stray.txt").write_text("", encoding="utf-8")
    return root


def _page(name: str, category: str) -> GitBookPage:
    return GitBookPage(name=name, title=name, category=category, filename=f"{name}.md")


class TestGitBookGenerator:
    @pytest.mark.asyncio
    async def test_copies_readmes(self, scaffolded: Path, tmp_path: Path):
        docs = tmp_path / "docs"
        result = await GitBookGenerator().generate(scaffolded, docs, {})
        assert sorted(p.name for p in result.pages) == ["arithmetic", "basic-counter", "zeta"]
        assert (docs / "basic-counter.md").read_text(encoding="utf-8") == "# Basic Counter\n\nbody\n"
        assert not (docs / "no-readme.md").exists()
        assert result.summary_path == str(docs / "SUMMARY.md")

    @pytest.mark.asyncio
    async def test_summary_groups_by_catalog_order(self, scaffolded: Path, tmp_path: Path):
        docs = tmp_path / "docs"
        categories = {"arithmetic": "operations", "basic-counter": "getting-started"}
        await GitBookGenerator().generate(scaffolded, docs, categories)

        summary = (docs / "SUMMARY.md").read_text(encoding="utf-8")
        assert summary.startswith("# Summary\n\n* [Introduction](README.md)\n")
        assert "## Operations\n\n* [Encrypted Arithmetic](arithmetic.md)\n" in summary
        assert "## Getting Started\n\n* [Basic Counter](basic-counter.md)\n" in summary
        assert "## Uncategorized\n\n* [zeta](zeta.md)\n" in summary
        assert summary.index("## Operations") < summary.index("## Getting Started") < summary.index("## Uncategorized")

    @pytest.mark.asyncio
    async def test_intro_lists_categories(self, scaffolded: Path, tmp_path: Path):
        docs = tmp_path / "docs"
        await GitBookGenerator().generate(scaffolded, docs, {"arithmetic": "operations"})
        intro = (docs / "README.md").read_text(encoding="utf-8")
        assert intro.startswith("# FHEVM Example Hub\n")
        assert "- **Operations**: arithmetic\n" in intro
        assert "- **Uncategorized**: basic-counter, zeta\n" in intro

    @pytest.mark.asyncio
    async def test_undecodable_readme_is_skipped(self, scaffolded: Path, tmp_path: Path):
        (scaffolded / "latin1").mkdir()
        (scaffolded / "latin1" / "README.md").write_bytes(b"# Caf\xe9 \xff\n")
        docs = tmp_path / "docs"

        result = await GitBookGenerator().generate(scaffolded, docs, {})

        assert sorted(p.name for p in result.pages) == ["arithmetic", "basic-counter", "zeta"]
        assert not (docs / "latin1.md").exists()
        assert "latin1" not in (docs / "SUMMARY.md").read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_missing_scaffolded_dir(self, tmp_path: Path):
        result = await GitBookGenerator().generate(tmp_path / "absent", tmp_path / "docs")
        assert result.pages == []
        assert (tmp_path / "docs" / "SUMMARY.md").read_text(encoding="utf-8").startswith("# Summary\n")


class TestHelpers:
    def test_readme_title(self):
        assert _readme_title("intro\n# Real Title \n# Second\n", "fallback") == "Real Title"
        assert _readme_title("## Only level two\n", "fallback") == "fallback"

    def test_group_by_category_without_catalog(self):
        pages = [_page("a", "uncategorized"), _page("b", "uncategorized")]
        assert _group_by_category(pages, {}) == [("uncategorized", pages)]

    def test_uncategorized_in_catalog_stays_last(self):
        pages = [_page("a", "uncategorized"), _page("b", "security")]
        groups = _group_by_category(pages, {"a": "uncategorized", "b": "security"})
        assert [category for category, _ in groups] == ["security", "uncategorized"]
