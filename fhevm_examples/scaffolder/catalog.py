"""Example catalog loading.

The catalog is a YAML list describing which examples ``scaffold-all``
produces, their GitBook category, and the template pair each one is built
from. Relative template paths are resolved against the catalog's directory.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

UNCATEGORIZED = "uncategorized"


class ExampleConfig(BaseModel):
    """One example to scaffold."""

    name: str = Field(..., min_length=1, description="Example name, e.g. 'basic-counter'")
    category: str = Field(default=UNCATEGORIZED, description="GitBook category")
    contract_template: Path = Field(..., description="Solidity contract template")
    test_template: Path = Field(..., description="TypeScript test template")


def load_catalog(path: str | Path) -> list[ExampleConfig]:
    """Load and validate the example catalog.

    Args:
        path: YAML file holding a top-level ``examples`` list (a bare list is
            accepted too).

    Returns:
        Examples in catalog order.

    Raises:
        FileNotFoundError: If the catalog does not exist.
        ValueError: If the YAML is malformed or an entry is invalid.
    """
    catalog_path = Path(path)
    raw = catalog_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in catalog {catalog_path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("examples")
    if not isinstance(data, list):
        raise ValueError(f"Catalog {catalog_path} must contain a list of examples")

    base_dir = catalog_path.parent
    examples: list[ExampleConfig] = []
    for index, entry in enumerate(data):
        try:
            example = ExampleConfig.model_validate(entry)
        except ValidationError as exc:
            raise ValueError(f"Invalid catalog entry #{index} in {catalog_path}: {exc}") from exc
        if not example.contract_template.is_absolute():
            example.contract_template = base_dir / example.contract_template
        if not example.test_template.is_absolute():
            example.test_template = base_dir / example.test_template
        examples.append(example)
    return examples


def category_map(examples: list[ExampleConfig]) -> dict[str, str]:
    """Return ``{example name: category}`` for GitBook grouping."""
    return {example.name: example.category for example in examples}
