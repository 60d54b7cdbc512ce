"""Example scaffolding orchestrator.

Takes an ``ExampleConfig`` and produces a standalone Hardhat project: a copy
of the base template with the example's contract and test swapped in, a
deploy script for the new contract, and a README generated from the test's
documentation tags.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.console import Console

from fhevm_examples.config import Config
from fhevm_examples.docgen.renderer import ReadmeGenerator
from fhevm_examples.utils import run_command, to_pascal_case
from fhevm_examples.validation.validator import validate_both

from .catalog import ExampleConfig
from .templates import TemplateRenderer

console = Console()


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Build outputs and dependencies of the base template that must not be copied.
_SKIP_DIRS = (
    ".git",
    "node_modules",
    "artifacts",
    "cache",
    "typechain-types",
    "coverage",
    "fhevmTemp",
)

_DEPLOY_TEMPLATE = "deploy.ts.j2"


# ---------------------------------------------------------------------------
# Exceptions & results
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a single example cannot be scaffolded."""

    def __init__(self, example: str, message: str) -> None:
        self.example = example
        super().__init__(f"{example}: {message}")


class ScaffoldResult(BaseModel):
    """Outcome of scaffolding one example."""

    name: str
    category: str = ""
    path: Optional[str] = Field(default=None, description="Scaffolded project root")
    readme_path: Optional[str] = Field(default=None, description="Generated README, if any")
    warnings: list[str] = Field(default_factory=list)
    success: bool = True
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ExampleGenerator:
    """Scaffolds FHEVM example projects from the base Hardhat template.

    Steps for one example:
    1. Validate the contract/test template pair (errors abort)
    2. Copy the base template into ``<output_dir>/<name>``
    3. Replace the template's sample contract and test with the example's
    4. Render ``deploy/deploy.ts`` for the example contract
    5. Generate ``README.md`` from the test's documentation tags
    6. Optionally install dependencies and compile
    """

    def __init__(
        self,
        config: Config,
        renderer: TemplateRenderer | None = None,
        readme_generator: ReadmeGenerator | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.readme_generator = readme_generator or ReadmeGenerator(config.test_subdir)

    # -- Public API --------------------------------------------------------

    async def generate(self, example: ExampleConfig) -> ScaffoldResult:
        """Scaffold *example* and return a description of the result.

        Raises:
            ScaffoldError: If validation, copying or the toolchain fails.
        """
        name = example.name
        contract_name = to_pascal_case(name)
        warnings = await self._validate(example)

        base = Path(self.config.base_template_dir)
        if not base.is_dir():
            raise ScaffoldError(name, f"Base template not found at {base}; run `setup` first")

        target = self.config.example_dir(name)
        console.print(f"  Copying base template to {target}")
        try:
            await asyncio.to_thread(_copy_base_template, base, target)
            await asyncio.to_thread(
                _install_templates,
                target,
                example,
                contract_name,
                self.config.contracts_subdir,
                self.config.test_subdir,
            )
            await self.renderer.render_to_file(
                _DEPLOY_TEMPLATE,
                target / "deploy" / "deploy.ts",
                {"contract_name": contract_name, "example_name": name},
            )
        except OSError as exc:
            raise ScaffoldError(name, f"Failed to write project files: {exc}") from exc

        readme = await self.readme_generator.generate(target, name)
        if readme is None:
            warnings.append("README.md could not be generated")

        if self.config.run_toolchain:
            await self._run_toolchain(name, target)

        return ScaffoldResult(
            name=name,
            category=example.category,
            path=str(target),
            readme_path=str(readme) if readme else None,
            warnings=warnings,
        )

    # -- Steps -------------------------------------------------------------

    async def _validate(self, example: ExampleConfig) -> list[str]:
        """Validate the template pair; return its warnings, raise on errors."""
        results = await validate_both(example.contract_template, example.test_template)
        errors = [f"contract: {e}" for e in results.contract.errors]
        errors.extend(f"test: {e}" for e in results.test.errors)
        if errors:
            raise ScaffoldError(example.name, "Template validation failed: " + "; ".join(errors))

        warnings = [f"contract: {w}" for w in results.contract.warnings]
        warnings.extend(f"test: {w}" for w in results.test.warnings)
        for warning in warnings:
            console.print(f"  [yellow]! {warning}[/yellow]")
        return warnings

    async def _run_toolchain(self, name: str, target: Path) -> None:
        """Install dependencies and compile the scaffolded project."""
        toolchain = self.config.toolchain
        steps = (
            (toolchain.install_command, toolchain.install_timeout),
            (toolchain.compile_command, toolchain.compile_timeout),
        )
        for command, timeout in steps:
            console.print(f"  Running `{command}`")
            returncode, _, stderr = await run_command(command, cwd=target, timeout=timeout)
            if returncode != 0:
                raise ScaffoldError(name, f"`{command}` failed: {stderr or f'exit code {returncode}'}")


# ---------------------------------------------------------------------------
# File helpers (run in worker threads)
# ---------------------------------------------------------------------------


def _copy_base_template(base: Path, target: Path) -> None:
    """Copy *base* to *target*, replacing any earlier scaffold."""
    if target.exists():
        shutil.rmtree(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(base, target, ignore=shutil.ignore_patterns(*_SKIP_DIRS))


def _install_templates(
    target: Path,
    example: ExampleConfig,
    contract_name: str,
    contracts_subdir: str,
    test_subdir: str,
) -> None:
    """Swap the base template's sample sources for the example's templates."""
    contracts_dir = target / contracts_subdir
    test_dir = target / test_subdir
    contracts_dir.mkdir(parents=True, exist_ok=True)
    test_dir.mkdir(parents=True, exist_ok=True)

    for stale in [*contracts_dir.glob("*.sol"), *test_dir.glob("*.ts")]:
        stale.unlink()

    shutil.copyfile(example.contract_template, contracts_dir / f"{contract_name}.sol")
    shutil.copyfile(example.test_template, test_dir / f"{contract_name}.ts")
