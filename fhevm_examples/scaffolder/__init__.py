"""FHEVM example scaffolder -- turns template pairs into standalone projects.

Each example is a copy of the FHEVM Hardhat base template with the example's
contract and test swapped in, a deploy script and a generated README.

Quick usage::

    from fhevm_examples.config import Config
    from fhevm_examples.scaffolder import ExampleGenerator, load_catalog

    config = Config()
    generator = ExampleGenerator(config)
    for example in load_catalog(config.catalog_path):
        result = await generator.generate(example)
"""

from fhevm_examples.scaffolder.base_template import BaseTemplateError, ensure_base_template
from fhevm_examples.scaffolder.catalog import ExampleConfig, category_map, load_catalog
from fhevm_examples.scaffolder.generator import ExampleGenerator, ScaffoldError, ScaffoldResult
from fhevm_examples.scaffolder.summary import ScaffoldRun, SummaryWriter, scaffold_all
from fhevm_examples.scaffolder.templates import TemplateRenderer

__all__ = [
    "ExampleConfig",
    "ExampleGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "ScaffoldRun",
    "SummaryWriter",
    "TemplateRenderer",
    "BaseTemplateError",
    "ensure_base_template",
    "load_catalog",
    "category_map",
    "scaffold_all",
]
