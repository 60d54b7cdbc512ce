"""Batch scaffolding and run summaries.

``scaffold_all`` drives :class:`ExampleGenerator` over a list of examples,
isolating failures per example. ``SummaryWriter`` then records the outcome as
``summary.txt`` (human-readable) and ``deliverables.json`` (one record per
example).
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from fhevm_examples.config import Config
from fhevm_examples.utils import save_json

from .catalog import ExampleConfig
from .generator import ExampleGenerator, ScaffoldError, ScaffoldResult
from .templates import TemplateRenderer

console = Console()

_SUMMARY_TEMPLATE = "summary.txt.j2"


class ScaffoldRun(BaseModel):
    """Results of a ``scaffold-all`` run."""

    results: list[ScaffoldResult] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def fail_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def success(self) -> bool:
        return self.fail_count == 0


async def scaffold_all(
    examples: list[ExampleConfig],
    generator: ExampleGenerator,
) -> ScaffoldRun:
    """Scaffold every example in order; one failure never stops the others."""
    run = ScaffoldRun()
    for example in examples:
        console.rule(f"[bold]Processing: {example.name}[/bold]")
        try:
            result = await generator.generate(example)
        except (ScaffoldError, OSError) as exc:
            console.print(f"[red]Failed to scaffold: {example.name}[/red]")
            console.print(f"[red]   Error: {escape(str(exc))}[/red]")
            result = ScaffoldResult(
                name=example.name,
                category=example.category,
                success=False,
                error=str(exc),
            )
        else:
            console.print(f"[green]Successfully scaffolded: {example.name}[/green]")
        run.results.append(result)
    return run


class SummaryWriter:
    """Writes ``summary.txt`` and ``deliverables.json`` for a run."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def render_summary(
        self,
        run: ScaffoldRun,
        examples: list[ExampleConfig],
        config: Config,
        generated_at: datetime | None = None,
    ) -> str:
        """Render the summary text without touching the file system."""
        timestamp = generated_at or datetime.now(timezone.utc)
        context = {
            "generated_at": timestamp.isoformat(),
            "results": run.results,
            "examples": examples,
            "success_count": run.success_count,
            "fail_count": run.fail_count,
            "total": len(run.results),
            "output_dir": config.output_dir.as_posix(),
            "summary_name": config.summary_path.name,
            "deliverables_name": config.deliverables_path.name,
        }
        return self.renderer.render(_SUMMARY_TEMPLATE, context)

    async def write(
        self,
        run: ScaffoldRun,
        examples: list[ExampleConfig],
        config: Config,
    ) -> tuple[Path, Path]:
        """Write both artefacts and return ``(summary_path, deliverables_path)``."""
        generated_at = datetime.now(timezone.utc)
        content = self.render_summary(run, examples, config, generated_at)
        summary_path = config.summary_path

        def _write_summary() -> None:
            summary_path.parent.mkdir(parents=True, exist_ok=True)
            summary_path.write_text(content, encoding="utf-8")

        await asyncio.to_thread(_write_summary)

        deliverables = {
            "generated_at": generated_at.isoformat(),
            "total": len(run.results),
            "successful": run.success_count,
            "failed": run.fail_count,
            "examples": [r.model_dump() for r in run.results],
        }
        await save_json(deliverables, config.deliverables_path)

        console.print(f"\nSummary written to: {summary_path}")
        console.print(f"Deliverables written to: {config.deliverables_path}")
        return summary_path, config.deliverables_path
