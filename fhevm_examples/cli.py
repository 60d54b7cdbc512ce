"""FHEVM examples generator command-line interface.

Sequences the generator's steps:

setup         -- Clone the FHEVM Hardhat base template.
create        -- Scaffold a single example from a contract/test template pair.
scaffold-all  -- Scaffold every example of the catalog and write run summaries.
validate      -- Validate every template pair under the templates directory.
docs          -- (Re)generate the README of one scaffolded example.
gitbook       -- Collect example READMEs into a GitBook docs/ tree.

Usage::

    python -m fhevm_examples setup
    python -m fhevm_examples create basic-counter \\
        --contract-template templates/contracts/basic-counter.sol \\
        --test-template templates/tests/basic-counter.test.ts
    python -m fhevm_examples scaffold-all
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.markup import escape

from fhevm_examples.config import Config
from fhevm_examples.docgen.renderer import ReadmeGenerator
from fhevm_examples.reporter.gitbook import GitBookGenerator
from fhevm_examples.scaffolder.base_template import BaseTemplateError, ensure_base_template
from fhevm_examples.scaffolder.catalog import ExampleConfig, category_map, load_catalog
from fhevm_examples.scaffolder.generator import ExampleGenerator, ScaffoldError
from fhevm_examples.scaffolder.summary import SummaryWriter, scaffold_all
from fhevm_examples.utils import (
    console,
    format_duration,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)
from fhevm_examples.validation.validator import ValidationReport, validate_template_dir


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_setup(config: Config) -> int:
    """Ensure the base template clone exists."""
    print_header("FHEVM Examples Generator - Setup")
    try:
        await ensure_base_template(config)
    except BaseTemplateError as exc:
        print_error(f"Failed to clone base template: {escape(str(exc))}")
        console.print("Please ensure you have git installed and internet connectivity.")
        return 1
    print_success("Setup complete!")
    return 0


async def cmd_create(config: Config, example: ExampleConfig) -> int:
    """Scaffold a single example."""
    print_header(f"Scaffolding: {example.name}")
    generator = ExampleGenerator(config)
    try:
        result = await generator.generate(example)
    except ScaffoldError as exc:
        print_error(f"Failed to scaffold {escape(str(exc))}")
        return 1

    print_summary_table(
        {
            "Example": result.name,
            "Category": result.category,
            "Path": result.path or "-",
            "README": result.readme_path or "not generated",
            "Warnings": str(len(result.warnings)),
        },
        title="Scaffold Result",
    )
    print_success(f"Successfully scaffolded: {result.name}")
    return 0


async def cmd_scaffold_all(config: Config) -> int:
    """Scaffold every catalog example, then write summary.txt and deliverables.json."""
    try:
        examples = load_catalog(config.catalog_path)
    except (OSError, ValueError) as exc:
        print_error(f"Cannot load catalog: {escape(str(exc))}")
        return 1

    print_header("FHEVM Examples Generator - Scaffold All Examples")
    console.print(f"Scaffolding {len(examples)} example(s)...\n")

    started = time.monotonic()
    run = await scaffold_all(examples, ExampleGenerator(config))
    await SummaryWriter().write(run, examples, config)

    print_summary_table(
        {
            "Successful": str(run.success_count),
            "Failed": str(run.fail_count),
            "Total": str(len(run.results)),
            "Duration": format_duration(time.monotonic() - started),
        },
        title="Scaffold Summary",
    )
    return 0 if run.success else 1


def print_validation_report(report: ValidationReport) -> None:
    """Print per-template errors/warnings followed by the totals."""
    for name, pair in report.pairs.items():
        console.print(f"Validating: [bold]{name}[/bold]")
        for label, result in (("Contract", pair.contract), ("Test", pair.test)):
            if result.errors:
                console.print(f"  [red]{label} errors:[/red]")
                for error in result.errors:
                    console.print(f"     - {escape(error)}")
            if result.warnings:
                console.print(f"  [yellow]{label} warnings:[/yellow]")
                for warning in result.warnings:
                    console.print(f"     - {escape(warning)}")
        if pair.valid:
            console.print("  [green]Valid[/green]")
        console.print()

    print_summary_table(
        {
            "Valid templates": f"{report.valid_count}/{len(report.pairs)}",
            "Total errors": str(report.total_errors),
            "Total warnings": str(report.total_warnings),
        },
        title="Validation Summary",
    )


async def cmd_validate(templates_dir: Path) -> int:
    """Validate every template pair and report the results."""
    print_header("Validating all templates")
    report = await validate_template_dir(templates_dir)
    if not report.pairs:
        print_warning(f"No contract templates found under {templates_dir / 'contracts'}")
    print_validation_report(report)
    if not report.success:
        print_error("Template validation failed!")
        return 1
    print_success("All templates validated successfully!")
    return 0


async def cmd_docs(config: Config, example_dir: Path, name: Optional[str]) -> int:
    """Regenerate the README of one scaffolded example."""
    example_name = name or example_dir.name
    readme = await ReadmeGenerator(config.test_subdir).generate(example_dir, example_name)
    return 0 if readme is not None else 1


async def cmd_gitbook(config: Config) -> int:
    """Collect scaffolded READMEs into the GitBook docs directory."""
    print_header("Generating GitBook documentation")
    categories: dict[str, str] = {}
    if config.catalog_path.is_file():
        try:
            categories = category_map(load_catalog(config.catalog_path))
        except ValueError as exc:
            print_warning(f"Ignoring catalog categories: {escape(str(exc))}")

    result = await GitBookGenerator().generate(config.output_dir, config.docs_dir, categories)
    if not result.pages:
        print_warning(f"No scaffolded READMEs found under {config.output_dir}")
    print_success(f"GitBook documentation ready in {result.docs_dir}")
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the ``fhevm-examples`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="fhevm-examples",
        description="FHEVM examples generator -- scaffold, document and validate examples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fhevm-examples setup\n"
            "  fhevm-examples create basic-counter --contract-template C.sol --test-template T.ts\n"
            "  fhevm-examples scaffold-all --catalog examples.yaml\n"
            "  fhevm-examples validate --templates-dir templates\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup", help="Clone the FHEVM Hardhat base template")

    create = subparsers.add_parser("create", help="Scaffold a single example")
    create.add_argument("name", help="Example name, e.g. basic-counter")
    create.add_argument("--contract-template", required=True, help="Solidity contract template")
    create.add_argument("--test-template", required=True, help="TypeScript test template")
    create.add_argument("--category", default="uncategorized", help="GitBook category")
    create.add_argument("--out-dir", default=None, help="Output directory (default: ./scaffolded)")
    create.add_argument("--toolchain", action="store_true", help="Run npm install + compile")

    scaffold = subparsers.add_parser("scaffold-all", help="Scaffold every catalog example")
    scaffold.add_argument("--catalog", default=None, help="Example catalog YAML (default: ./examples.yaml)")
    scaffold.add_argument("--out-dir", default=None, help="Output directory (default: ./scaffolded)")
    scaffold.add_argument("--toolchain", action="store_true", help="Run npm install + compile")

    validate = subparsers.add_parser("validate", help="Validate all template pairs")
    validate.add_argument("--templates-dir", default=None, help="Templates root (default: ./templates)")

    docs = subparsers.add_parser("docs", help="Regenerate one example README")
    docs.add_argument("example_dir", help="Scaffolded example directory")
    docs.add_argument("--name", default=None, help="Example name (default: directory name)")

    gitbook = subparsers.add_parser("gitbook", help="Build the GitBook docs/ tree")
    gitbook.add_argument("--scaffolded-dir", default=None, help="Scaffolded examples (default: ./scaffolded)")
    gitbook.add_argument("--docs-dir", default=None, help="Destination (default: ./docs)")
    gitbook.add_argument("--catalog", default=None, help="Catalog used for categories")

    return parser


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return *config* updated with any path/flag given on the command line."""
    updates: dict[str, object] = {}
    for attr, field_name in (
        ("out_dir", "output_dir"),
        ("scaffolded_dir", "output_dir"),
        ("docs_dir", "docs_dir"),
        ("catalog", "catalog_path"),
        ("templates_dir", "templates_dir"),
    ):
        value = getattr(args, attr, None)
        if value:
            updates[field_name] = Path(value)
    if getattr(args, "toolchain", False):
        updates["run_toolchain"] = True
    return config.model_copy(update=updates)


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the selected command and return its exit code."""
    args = build_parser().parse_args(argv)
    config = _apply_overrides(Config.from_env(), args)

    if args.command == "setup":
        return asyncio.run(cmd_setup(config))
    if args.command == "create":
        try:
            example = ExampleConfig(
                name=args.name,
                category=args.category,
                contract_template=Path(args.contract_template),
                test_template=Path(args.test_template),
            )
        except ValidationError as exc:
            print_error(f"Invalid example {args.name!r}: {escape(str(exc))}")
            return 1
        return asyncio.run(cmd_create(config, example))
    if args.command == "scaffold-all":
        return asyncio.run(cmd_scaffold_all(config))
    if args.command == "validate":
        return asyncio.run(cmd_validate(config.templates_dir))
    if args.command == "docs":
        return asyncio.run(cmd_docs(config, Path(args.example_dir), args.name))
    if args.command == "gitbook":
        return asyncio.run(cmd_gitbook(config))
    return 2


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
