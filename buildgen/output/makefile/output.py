"""
Makefile Output

Accumulates variable groups and targets from the nodes that implement
MakefileCompiler, then renders the Makefile.
"""

from typing import Dict, List, Protocol, TextIO, runtime_checkable
import logging

from ..files import FileOutput
from ..preamble import preamble
from .target import Target
from .variable import VariableGroup

logger = logging.getLogger(__name__)

MAKEFILE = "Makefile"

VARIABLE_GROUP_COMMON = "common variables"
VARIABLE_GROUP_DOCKER = "docker build settings"
VARIABLE_GROUP_HELP = "help menu"


@runtime_checkable
class MakefileCompiler(Protocol):
    """Implemented by blocks contributing to the Makefile."""

    def compile_makefile(self, output: "MakefileOutput") -> None:
        ...


@runtime_checkable
class SkipAsMakefileDependency(Protocol):
    """
    Marker for blocks which should never be listed as Makefile dependencies.

    Having the method is the whole signal; it is never called.
    """

    def skip_as_makefile_dependency(self) -> None:
        ...


class MakefileOutput(FileOutput):
    """
    Makefile generation.

    Variable groups render in creation order, then targets in creation
    order with the `all` target moved to the front so it stays the default.

    Example usage:
        output = MakefileOutput()
        output.variable_group(VARIABLE_GROUP_COMMON).variable(simple_variable("ARTIFACTS", "_out"))
        output.target("clean").script("@rm -rf $(ARTIFACTS)").phony()
    """
    capability = MakefileCompiler

    def __init__(self):
        self.variable_groups: Dict[str, VariableGroup] = {}
        self.targets: List[Target] = []

    def variable_group(self, description: str) -> VariableGroup:
        """Return the group with this description, creating it on first use."""
        if description not in self.variable_groups:
            self.variable_groups[description] = VariableGroup(description)

        return self.variable_groups[description]

    def target(self, name: str) -> Target:
        if any(target.name == name for target in self.targets):
            logger.warning(f"Duplicate Makefile target: {name}")

        target = Target(name)
        self.targets.append(target)
        return target

    def filenames(self) -> List[str]:
        return [MAKEFILE]

    def generate_file(self, filename: str, stream: TextIO) -> None:
        if filename != MAKEFILE:
            raise ValueError(f"Unexpected filename: {filename}")

        stream.write(preamble("# "))

        for group in self.variable_groups.values():
            group.generate(stream)

        for target in sorted(self.targets, key=lambda target: target.name != "all"):
            target.generate(stream)
