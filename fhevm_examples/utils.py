"""Shared helpers for the FHEVM examples generator.

Async subprocess execution for ``git``/``npm``, example name conversions,
JSON output and the Rich console used for every human-facing message.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any, NamedTuple

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


class CommandResult(NamedTuple):
    """Exit status and decoded, stripped output of a finished command."""

    returncode: int
    stdout: str
    stderr: str


def _decode(raw: bytes | None) -> str:
    return (raw or b"").decode("utf-8", errors="replace").strip()


async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run *cmd* and wait for it, killing it after *timeout* seconds.

    A list is executed directly; a string goes through the shell (the
    toolchain commands in ``ToolchainConfig`` are plain strings such as
    ``"npm ci"``). *env* is layered on top of the current environment.

    A timed-out command yields return code ``-1`` with the reason in
    ``stderr``; it never raises.
    """
    kwargs: dict[str, Any] = {
        "stdout": asyncio.subprocess.PIPE,
        "stderr": asyncio.subprocess.PIPE,
        "cwd": str(cwd) if cwd else None,
        "env": {**os.environ, **env} if env else None,
    }
    if isinstance(cmd, str):
        display = cmd
        process = await asyncio.create_subprocess_shell(cmd, **kwargs)
    else:
        display = " ".join(cmd)
        process = await asyncio.create_subprocess_exec(*cmd, **kwargs)

    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return CommandResult(-1, "", f"Command timed out after {timeout}s: {display}")

    return CommandResult(process.returncode or 0, _decode(out), _decode(err))


# ---------------------------------------------------------------------------
# Example names
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Lower-case *name* and collapse every non-alphanumeric run into ``-``.

    ``"Getting Started"`` becomes ``"getting-started"`` and
    ``" ERC7984 (OpenZeppelin) "`` becomes ``"erc7984-openzeppelin"``.
    """
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def to_pascal_case(name: str) -> str:
    """``basic-counter`` or ``basic_counter`` -> ``BasicCounter`` (contract names)."""
    parts = re.split(r"[-_\s]+", name)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


# ---------------------------------------------------------------------------
# Output files
# ---------------------------------------------------------------------------


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Write *data* as indented UTF-8 JSON, creating parent directories.

    Values JSON cannot encode (paths, datetimes) are written with ``str``.
    """
    target = Path(path)
    text = json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n"

    def _write() -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    await asyncio.to_thread(_write)
    return target


def format_duration(seconds: float) -> str:
    """``3.7`` -> ``"3.7s"``, ``65.2`` -> ``"1m 5s"``; negative input counts as zero."""
    minutes, secs = divmod(max(seconds, 0.0), 60)
    if minutes:
        return f"{int(minutes)}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Console reporting
# ---------------------------------------------------------------------------


def print_header(title: str, color: str = "bright_cyan") -> None:
    """Announce a command with a full-width rule."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print *data* as a two-column table, keys on the left."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, str(value))
    console.print(table)
    console.print()


def _print_styled(message: str, style: str) -> None:
    console.print(message, style=style)


def print_success(message: str) -> None:
    _print_styled(message, "bold green")


def print_error(message: str) -> None:
    _print_styled(message, "bold red")


def print_warning(message: str) -> None:
    _print_styled(message, "bold yellow")
