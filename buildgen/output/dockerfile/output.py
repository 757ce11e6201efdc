"""
Dockerfile Output

Accumulates build args, stages and allowed local paths from the nodes that
implement DockerfileCompiler, then renders a Dockerfile and .dockerignore.
"""

from typing import Dict, List, Protocol, TextIO, runtime_checkable
import logging

from ..files import FileOutput
from ..preamble import preamble
from ...toposort import stable_sort
from .stage import Stage
from .step import Arg

logger = logging.getLogger(__name__)

DOCKERFILE = "Dockerfile"
DOCKERIGNORE = ".dockerignore"
FRONTEND_SYNTAX = "docker/dockerfile-upstream:1.7.0-labs"


@runtime_checkable
class DockerfileCompiler(Protocol):
    """Implemented by blocks contributing to the Dockerfile."""

    def compile_dockerfile(self, output: "DockerfileOutput") -> None:
        ...


class DockerfileOutput(FileOutput):
    """
    Dockerfile and .dockerignore generation.

    Stages are rendered sorted by name, then stably ordered so every stage
    follows the stages it builds on.

    Example usage:
        output = DockerfileOutput()
        output.stage("base").from_("toolchain")
        output.stage("toolchain").from_("golang:1.22-alpine")
        output.render()[DOCKERFILE]  # toolchain stage first
    """
    capability = DockerfileCompiler

    def __init__(self):
        self.args: List[Arg] = []
        self.stages: Dict[str, Stage] = {}
        self.allowed_local_paths: List[str] = []

    def stage(self, name: str) -> Stage:
        """Create (or replace) the stage with the given name."""
        if name in self.stages:
            logger.warning(f"Redefining Dockerfile stage: {name}")

        stage = Stage(name)
        self.stages[name] = stage
        return stage

    def arg(self, arg: Arg) -> "DockerfileOutput":
        self.args.append(arg)
        return self

    def allow_local_path(self, *paths: str) -> "DockerfileOutput":
        for path in paths:
            if path not in self.allowed_local_paths:
                self.allowed_local_paths.append(path)
        return self

    def filenames(self) -> List[str]:
        return [DOCKERFILE, DOCKERIGNORE]

    def generate_file(self, filename: str, stream: TextIO) -> None:
        if filename == DOCKERFILE:
            self._dockerfile(stream)
        elif filename == DOCKERIGNORE:
            self._dockerignore(stream)
        else:
            raise ValueError(f"Unexpected filename: {filename}")

    def ordered_stages(self) -> List[Stage]:
        """
        Stages in rendering order.

        Raises:
            CycleError: If stages depend on each other circularly
        """
        by_name = sorted(self.stages.values(), key=lambda stage: stage.name)
        return stable_sort(by_name).raise_for_cycle(lambda stage: stage.name)

    def _dockerfile(self, stream: TextIO) -> None:
        stream.write(f"# syntax = {FRONTEND_SYNTAX}\n\n")
        stream.write(preamble("# "))

        for arg in self.args:
            arg.generate(stream)

        stream.write("\n")

        for stage in self.ordered_stages():
            stage.generate(stream)

    def _dockerignore(self, stream: TextIO) -> None:
        stream.write(preamble("# "))
        stream.write("*\n")

        for path in self.allowed_local_paths:
            stream.write(f"!{path}\n")
