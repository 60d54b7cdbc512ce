"""FHEVM examples generator configuration.

Centralised, typed configuration for the scaffolding tool. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_BASE_TEMPLATE_URL = "https://github.com/zama-ai/fhevm-hardhat-template.git"


class ToolchainConfig(BaseModel):
    """Commands used to install and compile a scaffolded Hardhat project."""

    install_command: str = Field(default="npm ci")
    compile_command: str = Field(default="npx hardhat compile")
    install_timeout: int = Field(default=600, ge=10, description="Install timeout in seconds")
    compile_timeout: int = Field(default=300, ge=10, description="Compile timeout in seconds")


class Config(BaseModel):
    """Global configuration for the FHEVM examples generator.

    Instances are typically created once by the CLI entry point and then
    passed to the scaffolder, validator and GitBook generator.
    """

    base_template_url: str = Field(default=DEFAULT_BASE_TEMPLATE_URL)
    base_template_dir: Path = Field(default=Path("./base-template"))
    templates_dir: Path = Field(default=Path("./templates"))
    output_dir: Path = Field(default=Path("./scaffolded"))
    docs_dir: Path = Field(default=Path("./docs"))
    catalog_path: Path = Field(default=Path("./examples.yaml"))
    test_subdir: str = Field(default="test", description="Test folder inside a Hardhat project")
    contracts_subdir: str = Field(default="contracts", description="Contract folder inside a Hardhat project")
    run_toolchain: bool = Field(
        default=False, description="Run install + compile after scaffolding each example"
    )
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def summary_path(self) -> Path:
        """Path to the human-readable run summary."""
        return self.output_dir.parent / "summary.txt"

    @property
    def deliverables_path(self) -> Path:
        """Path to the machine-readable per-example results."""
        return self.output_dir.parent / "deliverables.json"

    def example_dir(self, name: str) -> Path:
        """Directory a scaffolded example is written to."""
        return self.output_dir / name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FHEVM_BASE_TEMPLATE_URL, FHEVM_BASE_TEMPLATE_DIR, FHEVM_TEMPLATES_DIR,
            FHEVM_OUTPUT_DIR, FHEVM_DOCS_DIR, FHEVM_CATALOG, FHEVM_RUN_TOOLCHAIN,
            FHEVM_INSTALL_TIMEOUT, FHEVM_COMPILE_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        path_vars = {
            "FHEVM_BASE_TEMPLATE_DIR": "base_template_dir",
            "FHEVM_TEMPLATES_DIR": "templates_dir",
            "FHEVM_OUTPUT_DIR": "output_dir",
            "FHEVM_DOCS_DIR": "docs_dir",
            "FHEVM_CATALOG": "catalog_path",
        }
        for env_name, field_name in path_vars.items():
            if os.environ.get(env_name):
                kwargs[field_name] = Path(os.environ[env_name])
        if os.environ.get("FHEVM_BASE_TEMPLATE_URL"):
            kwargs["base_template_url"] = os.environ["FHEVM_BASE_TEMPLATE_URL"]
        if os.environ.get("FHEVM_RUN_TOOLCHAIN"):
            kwargs["run_toolchain"] = os.environ["FHEVM_RUN_TOOLCHAIN"].strip().lower() in (
                "1", "true", "yes", "on",
            )

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_INSTALL_TIMEOUT"):
            toolchain_kwargs["install_timeout"] = int(os.environ["FHEVM_INSTALL_TIMEOUT"])
        if os.environ.get("FHEVM_COMPILE_TIMEOUT"):
            toolchain_kwargs["compile_timeout"] = int(os.environ["FHEVM_COMPILE_TIMEOUT"])

        return cls(toolchain=ToolchainConfig(**toolchain_kwargs), **kwargs)
