"""Unit tests for base template management (``git`` is always mocked)."""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_examples.config import Config
from fhevm_examples.scaffolder.base_template import (
    BaseTemplateError,
    ensure_base_template,
    is_git_repository,
)


pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class TestEnsureBaseTemplate:
    async def test_clones_when_missing(self, tmp_path: Path, mock_git_command):
        config = Config(base_template_dir=tmp_path / "base-template")
        path = await ensure_base_template(config)
        assert path == tmp_path / "base-template"
        mock_git_command.assert_awaited_once_with(
            ["git", "clone", config.base_template_url, str(tmp_path / "base-template")],
            timeout=300,
        )

    async def test_reuses_valid_repository(self, config: Config, mock_git_command):
        path = await ensure_base_template(config)
        assert path == config.base_template_dir
        mock_git_command.assert_awaited_once()
        assert mock_git_command.await_args.args[0] == ["git", "status"]

    async def test_recreates_invalid_repository(self, config: Config, mock_git_command):
        mock_git_command.side_effect = [(128, "", "fatal: not a git repository"), (0, "", "")]
        await ensure_base_template(config)
        assert not config.base_template_dir.exists()
        clone_call = mock_git_command.await_args_list[1]
        assert clone_call.args[0][:2] == ["git", "clone"]

    async def test_clone_failure_raises(self, tmp_path: Path, mock_git_command):
        mock_git_command.return_value = (128, "", "Could not resolve host: github.com")
        config = Config(base_template_dir=tmp_path / "base-template")
        with pytest.raises(BaseTemplateError, match="Could not resolve host"):
            await ensure_base_template(config)


class TestIsGitRepository:
    async def test_reflects_git_status(self, tmp_path: Path, mock_git_command):
        assert await is_git_repository(tmp_path) is True
        mock_git_command.return_value = (128, "", "")
        assert await is_git_repository(tmp_path) is False
