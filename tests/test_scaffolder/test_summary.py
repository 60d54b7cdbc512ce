"""Tests for batch scaffolding and run summaries (fhevm_examples.scaffolder.summary)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from fhevm_examples.config import Config
from fhevm_examples.scaffolder.catalog import ExampleConfig
from fhevm_examples.scaffolder.generator import ExampleGenerator, ScaffoldError, ScaffoldResult
from fhevm_examples.scaffolder.summary import ScaffoldRun, SummaryWriter, scaffold_all


pytestmark = pytest.mark.unit


@pytest.fixture
def broken_example(tmp_path: Path) -> ExampleConfig:
    return ExampleConfig(
        name="broken",
        category="operations",
        contract_template=tmp_path / "missing.sol",
        test_template=tmp_path / "missing.test.ts",
    )


@pytest.fixture
def mixed_run() -> ScaffoldRun:
    return ScaffoldRun(
        results=[
            ScaffoldResult(name="basic-counter", category="getting-started", path="out/basic-counter"),
            ScaffoldResult(name="broken", category="operations", success=False, error="broken: boom"),
        ]
    )


# ---------------------------------------------------------------------------
# ScaffoldRun
# ---------------------------------------------------------------------------


class TestScaffoldRun:
    def test_counts(self, mixed_run: ScaffoldRun):
        assert mixed_run.success_count == 1
        assert mixed_run.fail_count == 1
        assert mixed_run.success is False

    def test_empty_run_succeeds(self):
        assert ScaffoldRun().success is True


# ---------------------------------------------------------------------------
# scaffold_all
# ---------------------------------------------------------------------------


class TestScaffoldAll:
    @pytest.mark.asyncio
    async def test_failure_does_not_stop_the_batch(
        self, config: Config, example: ExampleConfig, broken_example: ExampleConfig
    ):
        run = await scaffold_all([broken_example, example], ExampleGenerator(config))
        assert [r.name for r in run.results] == ["broken", "basic-counter"]
        failed, succeeded = run.results
        assert failed.success is False
        assert failed.category == "operations"
        assert "Contract template not found" in failed.error
        assert succeeded.success is True
        assert (config.output_dir / "basic-counter" / "README.md").is_file()

    @pytest.mark.asyncio
    async def test_os_errors_are_isolated(self, example: ExampleConfig):
        generator = AsyncMock(spec=ExampleGenerator)
        generator.generate.side_effect = [PermissionError("read-only"), ScaffoldError("b", "bad")]
        run = await scaffold_all([example, example], generator)
        assert [r.error for r in run.results] == ["read-only", "b: bad"]
        assert run.fail_count == 2


# ---------------------------------------------------------------------------
# SummaryWriter
# ---------------------------------------------------------------------------


class TestSummaryWriter:
    def test_render_summary(self, mixed_run: ScaffoldRun, example: ExampleConfig, config: Config):
        text = SummaryWriter().render_summary(
            mixed_run,
            [example],
            config,
            generated_at=datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc),
        )
        assert "Generated: 2026-01-15T10:30:00+00:00" in text
        assert "  OK   basic-counter\n" in text
        assert "  FAIL broken - broken: boom\n" in text
        assert "Successful: 1\n  Failed: 1\n  Total: 2" in text
        assert (
            f"fhevm-examples create basic-counter --category getting-started "
            f"--contract-template {example.contract_template} "
            f"--test-template {example.test_template}"
        ) in text
        assert "deliverables.json: Detailed results for each example" in text
        assert f"{config.output_dir.as_posix()}/: Directory containing all generated examples" in text

    @pytest.mark.asyncio
    async def test_write(self, mixed_run: ScaffoldRun, example: ExampleConfig, config: Config):
        summary_path, deliverables_path = await SummaryWriter().write(mixed_run, [example], config)

        assert summary_path == config.output_dir.parent / "summary.txt"
        assert summary_path.read_text(encoding="utf-8").startswith(
            "FHEVM Examples Generator - Scaffold Summary\n"
        )
        data = json.loads(deliverables_path.read_text(encoding="utf-8"))
        assert data["total"] == 2
        assert data["successful"] == 1
        assert data["failed"] == 1
        assert [e["name"] for e in data["examples"]] == ["basic-counter", "broken"]
        assert data["examples"][1]["error"] == "broken: boom"
        assert "generated_at" in data

    @pytest.mark.asyncio
    async def test_both_artefacts_share_one_timestamp(
        self, mixed_run: ScaffoldRun, example: ExampleConfig, config: Config, tmp_path: Path
    ):
        nested = config.model_copy(update={"output_dir": tmp_path / "a" / "b" / "scaffolded"})
        summary_path, deliverables_path = await SummaryWriter().write(mixed_run, [example], nested)

        assert summary_path.parent == tmp_path / "a" / "b"
        generated_line = summary_path.read_text(encoding="utf-8").splitlines()[1]
        data = json.loads(deliverables_path.read_text(encoding="utf-8"))
        assert generated_line == f"Generated: {data['generated_at']}"
        assert datetime.fromisoformat(data["generated_at"]).tzinfo is not None
