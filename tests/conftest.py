"""Shared pytest fixtures for the FHEVM examples generator test suite.

Provides reusable fixtures for:
- Documented TypeScript test sources
- Valid contract/test template pairs on disk
- A fake Hardhat base template
- A ``Config`` rooted in a temporary directory
- Mocked ``run_command`` for git/npm calls
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from fhevm_examples.config import Config
from fhevm_examples.scaffolder.catalog import ExampleConfig


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------

VALID_CONTRACT = textwrap.dedent("""\
    // SPDX-License-Identifier: BSD-3-Clause-Clear
    pragma solidity ^0.8.24;

    import {FHE, euint32} from "@fhevm/solidity/lib/FHE.sol";
    import {ZamaEthereumConfig} from "@fhevm/solidity/config/ZamaConfig.sol";

    contract BasicCounter is ZamaEthereumConfig {
        euint32 private _count;

        function increment() external {
            _count = FHE.add(_count, FHE.asEuint32(1));
            FHE.allowThis(_count);
        }
    }
""")

VALID_TEST = textwrap.dedent("""\
    import { expect } from 'chai';
    import { ethers } from 'hardhat';

    /**
     * @title Basic Counter Suite
     * @purpose Show an encrypted counter
     * @chapter Getting Started
     */
    describe('BasicCounter', function () {
      /**
       * @example Deploy
       * @note Runs on the mock FHEVM network
       */
      it('deploys', async function () {
        const counter = await ethers.deployContract('BasicCounter');
        expect(counter).to.not.be.undefined;
      });

      /**
       * @chapter Operations
       * @example Increment
       */
      it('increments', async function () {
        expect(true).to.equal(true);
      });
    });
""")


@pytest.fixture
def valid_contract_source() -> str:
    """A contract template satisfying every contract rule."""
    return VALID_CONTRACT


@pytest.fixture
def valid_test_source() -> str:
    """A documented test template satisfying every test rule."""
    return VALID_TEST


# ---------------------------------------------------------------------------
# Files & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def template_pair(tmp_path: Path) -> tuple[Path, Path]:
    """Valid ``(contract, test)`` template files on disk."""
    templates = tmp_path / "templates"
    (templates / "contracts").mkdir(parents=True)
    (templates / "tests").mkdir(parents=True)
    contract = templates / "contracts" / "basic-counter.sol"
    test = templates / "tests" / "basic-counter.test.ts"
    contract.write_text(VALID_CONTRACT, encoding="utf-8")
    test.write_text(VALID_TEST, encoding="utf-8")
    return contract, test


@pytest.fixture
def base_template_dir(tmp_path: Path) -> Path:
    """A minimal Hardhat project standing in for the cloned base template.

    Contains a sample contract and test (which scaffolding replaces) plus
    build artefacts that must not be copied.
    """
    base = tmp_path / "base-template"
    (base / "contracts").mkdir(parents=True)
    (base / "test").mkdir()
    (base / "deploy").mkdir()
    (base / "node_modules" / "hardhat").mkdir(parents=True)
    (base / "artifacts").mkdir()
    (base / ".git").mkdir()

    (base / "package.json").write_text('{"name": "fhevm-hardhat-template"}\n', encoding="utf-8")
    (base / "hardhat.config.ts").write_text("export default {};\n", encoding="utf-8")
    (base / "contracts" / "FHECounter.sol").write_text("// sample\n", encoding="utf-8")
    (base / "test" / "FHECounter.ts").write_text("// sample\n", encoding="utf-8")
    (base / "deploy" / "deploy.ts").write_text("// sample deploy\n", encoding="utf-8")
    (base / "node_modules" / "hardhat" / "index.js").write_text("", encoding="utf-8")
    (base / "artifacts" / "build.json").write_text("{}", encoding="utf-8")
    (base / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    return base


@pytest.fixture
def config(tmp_path: Path, base_template_dir: Path) -> Config:
    """A ``Config`` whose every directory lives under *tmp_path*."""
    return Config(
        base_template_dir=base_template_dir,
        templates_dir=tmp_path / "templates",
        output_dir=tmp_path / "out" / "scaffolded",
        docs_dir=tmp_path / "out" / "docs",
        catalog_path=tmp_path / "examples.yaml",
    )


@pytest.fixture
def example(template_pair: tuple[Path, Path]) -> ExampleConfig:
    """The basic-counter example built from ``template_pair``."""
    contract, test = template_pair
    return ExampleConfig(
        name="basic-counter",
        category="getting-started",
        contract_template=contract,
        test_template=test,
    )


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_generator_command():
    """Patch ``run_command`` as seen by the example generator.

    Succeeds by default; tests set ``return_value``/``side_effect`` to
    simulate failing toolchain steps.
    """
    with patch(
        "fhevm_examples.scaffolder.generator.run_command",
        new_callable=AsyncMock,
        return_value=(0, "", ""),
    ) as mocked:
        yield mocked


@pytest.fixture
def mock_git_command():
    """Patch ``run_command`` as seen by the base-template manager."""
    with patch(
        "fhevm_examples.scaffolder.base_template.run_command",
        new_callable=AsyncMock,
        return_value=(0, "", ""),
    ) as mocked:
        yield mocked
