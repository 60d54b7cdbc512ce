"""Base Hardhat template management.

Every example is scaffolded from a local clone of the FHEVM Hardhat template.
This module makes sure that clone exists and is a usable git repository.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from rich.console import Console

from fhevm_examples.config import Config
from fhevm_examples.utils import run_command

console = Console()

_CLONE_TIMEOUT = 300


class BaseTemplateError(Exception):
    """Raised when the base template cannot be prepared."""


async def is_git_repository(path: Path) -> bool:
    """Return ``True`` if ``git status`` succeeds inside *path*."""
    returncode, _, _ = await run_command(["git", "status"], cwd=path, timeout=30)
    return returncode == 0


async def ensure_base_template(config: Config) -> Path:
    """Clone the base template unless a valid clone is already present.

    A directory that exists but is not a git repository is removed and
    cloned again.

    Returns:
        Path to the base template directory.

    Raises:
        BaseTemplateError: If ``git clone`` fails.
    """
    target = Path(config.base_template_dir)

    if target.exists():
        console.print(f"[green]+[/green] {target} already exists")
        if await is_git_repository(target):
            console.print(f"[green]+[/green] {target} is a valid git repository")
            return target
        console.print(
            f"[yellow]{target} exists but is not a valid git repository, re-cloning[/yellow]"
        )
        await asyncio.to_thread(shutil.rmtree, target)

    console.print(f"Cloning base template from: {config.base_template_url}")
    returncode, _, stderr = await run_command(
        ["git", "clone", config.base_template_url, str(target)],
        timeout=_CLONE_TIMEOUT,
    )
    if returncode != 0:
        raise BaseTemplateError(
            f"Failed to clone {config.base_template_url}: {stderr or 'unknown error'}"
        )

    console.print("[green]+[/green] Successfully cloned base template")
    return target
