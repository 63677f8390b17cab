"""Jinja2-backed generation pipeline.

BundleGenerator renders a template bundle (a mapping of path templates to
file templates) in three phases:

- prepare: check the variables and compile every template
- generate: render paths and contents and write them under a target directory
- finalize: report what was written

Failures in any phase raise GenerationError naming the phase.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from jinja2 import DictLoader, Environment, StrictUndefined, Template, TemplateError

from fireconf.generation.templates import BUNDLE, REQUIRED_VARIABLES
from fireconf.utils.console import print_step, print_success
from fireconf.utils.errors import GenerationError
from fireconf.utils.logging import log_message


class BundleGenerator:
    """Generation pipeline rendering a Jinja2 template bundle.

    Attributes:
        bundle: Mapping of relative path template to file template
        required_variables: Variables that must be present before rendering
        written: Files written by the last generate() call
    """

    def __init__(
        self,
        bundle: Mapping[str, str] | None = None,
        required_variables: tuple[str, ...] = REQUIRED_VARIABLES,
    ) -> None:
        self.bundle = dict(BUNDLE if bundle is None else bundle)
        self.required_variables = required_variables
        self.written: list[Path] = []
        self._env = Environment(
            loader=DictLoader(self.bundle),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._templates: dict[str, Template] = {}

    def prepare(self, variables: Mapping[str, str]) -> None:
        """Validate variables and compile templates."""
        missing = [name for name in self.required_variables if name not in variables]
        if missing:
            raise GenerationError(
                f"Missing generation variables: {', '.join(missing)}", phase="prepare"
            )
        try:
            self._templates = {path: self._env.get_template(path) for path in self.bundle}
        except TemplateError as e:
            raise GenerationError(f"Invalid template: {e}", phase="prepare") from e
        self.written = []
        log_message(f"Prepared {len(self._templates)} templates")

    def generate(self, target_dir: Path, variables: Mapping[str, str]) -> list[Path]:
        """Render every template and write it below ``target_dir``.

        Returns:
            Paths of the files written
        """
        if not self._templates:
            raise GenerationError("generate() called before prepare()", phase="generate")

        context = dict(variables)
        written: list[Path] = []
        try:
            for path_template, template in self._templates.items():
                relative = self._env.from_string(path_template).render(context)
                destination = target_dir / relative
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_text(template.render(context))
                written.append(destination)
                log_message(f"Generated {destination}")
        except TemplateError as e:
            raise GenerationError(f"Template rendering failed: {e}", phase="generate") from e
        except OSError as e:
            raise GenerationError(f"Could not write {e.filename}: {e}", phase="generate") from e

        self.written = written
        return written

    def finalize(self, variables: Mapping[str, str]) -> None:
        """Report the generated files."""
        for path in self.written:
            print_step(f"Created {path}")
        print_success(
            f"Generated {len(self.written)} files for project {variables.get('project_id', '')}"
        )


__all__ = [
    "BundleGenerator",
]
