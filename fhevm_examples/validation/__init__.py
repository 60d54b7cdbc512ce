"""Template validation for FHEVM examples.

Usage::

    from fhevm_examples.validation import validate_both

    results = await validate_both(
        "templates/contracts/basic-counter.sol",
        "templates/tests/basic-counter.test.ts",
    )
    print(results.contract.errors, results.test.warnings)
"""

from fhevm_examples.validation.validator import (
    CONTRACT_RULES,
    TEST_RULES,
    MarkerRule,
    Severity,
    TemplatePairResult,
    ValidationReport,
    ValidationResult,
    validate_both,
    validate_contract,
    validate_contract_template,
    validate_template_dir,
    validate_test,
    validate_test_template,
)

__all__ = [
    "validate_contract",
    "validate_test",
    "validate_contract_template",
    "validate_test_template",
    "validate_both",
    "validate_template_dir",
    "ValidationResult",
    "TemplatePairResult",
    "ValidationReport",
    "MarkerRule",
    "Severity",
    "CONTRACT_RULES",
    "TEST_RULES",
]
