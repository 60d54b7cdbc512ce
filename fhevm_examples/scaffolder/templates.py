"""Jinja2 rendering of generated project and report files.

The ``.j2`` files next to this module produce each example's
``deploy/deploy.ts``, the ``summary.txt`` of a scaffold-all run and the
GitBook ``SUMMARY.md``/``README.md``. Undefined template variables are errors
so that a missing context key never silently produces an empty string.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fhevm_examples.utils import slugify, to_pascal_case

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _build_environment(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(slugify=slugify, pascal_case=to_pascal_case)
    return env


class TemplateRenderer:
    """Renders the generator's Jinja2 templates.

    Usage::

        renderer = TemplateRenderer()
        text = renderer.render("summary.txt.j2", {...})
        await renderer.render_to_file("deploy.ts.j2", target / "deploy" / "deploy.ts", {...})
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self.env = _build_environment(self.template_dir)

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render *template_name* (relative to ``template_dir``) with *context*.

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
            jinja2.UndefinedError: If the template uses a key missing from *context*.
        """
        return self.env.get_template(template_name).render(context)

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_name* into *output_path*, creating its parent directories."""
        content = self.render(template_name, context)
        target = Path(output_path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

        await asyncio.to_thread(_write)
        return target
