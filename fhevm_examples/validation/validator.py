"""Structural validation of FHEVM contract and test templates.

Each template is checked against a fixed table of marker rules. A rule is a
plain substring that must appear somewhere in the file; a missing marker is
reported either as an error (the template is unusable) or as a warning (the
template works but misses a recommended convention). Nothing here parses
Solidity or TypeScript.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """How a missing marker is reported."""
    ERROR = "error"
    WARNING = "warning"


class MarkerRule(BaseModel):
    """A substring that a template is expected to contain."""
    marker: str = Field(..., description="Substring searched in the template text")
    severity: Severity = Field(..., description="Outcome when the marker is absent")
    message: str = Field(..., description="Message reported when the marker is absent")


class ValidationResult(BaseModel):
    """Outcome of validating one template."""
    errors: list[str] = Field(default_factory=list, description="Policy violations")
    warnings: list[str] = Field(default_factory=list, description="Advisories")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        """``True`` iff no error was reported. Warnings never matter."""
        return not self.errors


class TemplatePairResult(BaseModel):
    """Contract and test results reported side by side."""
    contract: ValidationResult
    test: ValidationResult

    @property
    def valid(self) -> bool:
        return self.contract.valid and self.test.valid


class ValidationReport(BaseModel):
    """Results for every template pair of a templates directory."""
    pairs: dict[str, TemplatePairResult] = Field(default_factory=dict)

    @property
    def total_errors(self) -> int:
        return sum(len(p.contract.errors) + len(p.test.errors) for p in self.pairs.values())

    @property
    def total_warnings(self) -> int:
        return sum(len(p.contract.warnings) + len(p.test.warnings) for p in self.pairs.values())

    @property
    def valid_count(self) -> int:
        return sum(1 for p in self.pairs.values() if p.valid)

    @property
    def success(self) -> bool:
        return self.total_errors == 0


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

CONTRACT_RULES: tuple[MarkerRule, ...] = (
    MarkerRule(
        marker="@fhevm/solidity",
        severity=Severity.ERROR,
        message="Missing @fhevm/solidity import",
    ),
    MarkerRule(
        marker="ZamaEthereumConfig",
        severity=Severity.WARNING,
        message="Contract should extend ZamaEthereumConfig",
    ),
    MarkerRule(
        marker="SPDX-License-Identifier",
        severity=Severity.WARNING,
        message="Missing SPDX license identifier",
    ),
    MarkerRule(
        marker="pragma solidity",
        severity=Severity.ERROR,
        message="Missing pragma solidity statement",
    ),
    MarkerRule(
        marker="FHE.",
        severity=Severity.WARNING,
        message="No FHE operations found in contract",
    ),
)

TEST_RULES: tuple[MarkerRule, ...] = (
    MarkerRule(marker="ethers", severity=Severity.ERROR, message="Missing ethers import"),
    MarkerRule(marker="expect", severity=Severity.ERROR, message="Missing chai expect import"),
    *(
        MarkerRule(
            marker=f"@{tag}",
            severity=Severity.WARNING,
            message=f"Missing @{tag} JSDoc tag",
        )
        for tag in ("title", "purpose", "chapter", "example")
    ),
    MarkerRule(marker="describe(", severity=Severity.ERROR, message="Missing describe block"),
    MarkerRule(marker="it(", severity=Severity.ERROR, message="Missing test cases (it blocks)"),
)


# ---------------------------------------------------------------------------
# Text-level validation
# ---------------------------------------------------------------------------

def check_markers(content: str, rules: tuple[MarkerRule, ...]) -> ValidationResult:
    """Check every rule independently against *content*."""
    result = ValidationResult()
    for rule in rules:
        if rule.marker in content:
            continue
        if rule.severity is Severity.ERROR:
            result.errors.append(rule.message)
        else:
            result.warnings.append(rule.message)
    return result


def validate_contract(content: str) -> ValidationResult:
    """Validate the text of a Solidity contract template."""
    return check_markers(content, CONTRACT_RULES)


def validate_test(content: str) -> ValidationResult:
    """Validate the text of a TypeScript test template."""
    return check_markers(content, TEST_RULES)


# ---------------------------------------------------------------------------
# Path-level validation
# ---------------------------------------------------------------------------

async def _validate_path(path: str | Path, label: str, rules: tuple[MarkerRule, ...]) -> ValidationResult:
    template = Path(path)
    if not template.is_file():
        return ValidationResult(errors=[f"{label} template not found: {path}"])
    try:
        content = await asyncio.to_thread(template.read_text, "utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return ValidationResult(errors=[f"{label} template could not be read: {path} ({exc})"])
    return check_markers(content, rules)


async def validate_contract_template(path: str | Path) -> ValidationResult:
    """Validate a contract template file. A missing file short-circuits."""
    return await _validate_path(path, "Contract", CONTRACT_RULES)


async def validate_test_template(path: str | Path) -> ValidationResult:
    """Validate a test template file. A missing file short-circuits."""
    return await _validate_path(path, "Test", TEST_RULES)


async def validate_both(contract_path: str | Path, test_path: str | Path) -> TemplatePairResult:
    """Validate a contract/test pair concurrently.

    The two checks are independent; their results are returned unmodified.
    """
    contract, test = await asyncio.gather(
        validate_contract_template(contract_path),
        validate_test_template(test_path),
    )
    return TemplatePairResult(contract=contract, test=test)


async def validate_template_dir(templates_dir: str | Path) -> ValidationReport:
    """Validate every ``contracts/<name>.sol`` against ``tests/<name>.test.ts``.

    Args:
        templates_dir: Root holding the ``contracts/`` and ``tests/`` folders.

    Returns:
        A ``ValidationReport`` keyed by template base name, in sorted order.
    """
    root = Path(templates_dir)
    contracts_dir = root / "contracts"
    contract_files = sorted(contracts_dir.glob("*.sol")) if contracts_dir.is_dir() else []

    report = ValidationReport()
    for contract_file in contract_files:
        name = contract_file.stem
        test_file = root / "tests" / f"{name}.test.ts"
        report.pairs[name] = await validate_both(contract_file, test_file)
    return report
