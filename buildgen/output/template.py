"""
Template Output

Generic output for files rendered from Jinja2 templates. Blocks register
files together with the template text and context; rendering is strict,
so a missing variable fails the generation instead of producing a
half-filled file.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, TextIO, Tuple, runtime_checkable
import logging

from jinja2 import Environment, StrictUndefined

from .files import DEFAULT_PERMISSIONS, FileOutput
from .preamble import preamble

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


@runtime_checkable
class TemplateCompiler(Protocol):
    """Implemented by blocks producing templated files."""

    def compile_template(self, output: "TemplateOutput") -> None:
        ...


@dataclass
class TemplateFile:
    """A file rendered from a template."""
    filename: str
    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    comment_prefix: str = "# "
    comment_postfix: str = ""
    with_preamble: bool = True
    permissions: int = DEFAULT_PERMISSIONS


class TemplateOutput(FileOutput):
    """
    Templated files generation.

    Example usage:
        output = TemplateOutput()
        output.define(TemplateFile(
            filename="CONTRIBUTING.md",
            template="# {{ project }}\\n",
            context={"project": "demo"},
            comment_prefix="<!-- ",
            comment_postfix=" -->",
        ))
    """
    capability = TemplateCompiler

    def __init__(self):
        self.files: Dict[str, TemplateFile] = {}
        self._env = Environment(
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def define(self, template_file: TemplateFile) -> "TemplateOutput":
        if template_file.filename in self.files:
            logger.warning(f"Redefining templated file: {template_file.filename}")

        self.files[template_file.filename] = template_file
        return self

    def filenames(self) -> List[str]:
        return list(self.files.keys())

    def permissions(self, filename: str) -> int:
        return self.files[filename].permissions

    def preamble_markers(self, filename: str) -> Tuple[str, ...]:
        marker = self.files[filename].comment_prefix.strip()
        return (marker,) if marker else ()

    def generate_file(self, filename: str, stream: TextIO) -> None:
        template_file = self.files.get(filename)
        if template_file is None:
            raise ValueError(f"Unexpected filename: {filename}")

        try:
            rendered = self._env.from_string(template_file.template).render(**template_file.context)
        except Exception as e:
            raise RenderError(f"Failed rendering template file: {filename}") from e

        if template_file.with_preamble:
            postfixes = [template_file.comment_postfix] if template_file.comment_postfix else []
            stream.write(preamble(template_file.comment_prefix, *postfixes))

        stream.write(rendered)
