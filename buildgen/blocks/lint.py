"""
Lint Blocks

A Linter is one check run in its own Dockerfile stage; Lint aggregates
every linter it depends on into a single `lint` Makefile target and
CI step.
"""

from typing import List, Protocol, runtime_checkable

from ..config.loader import BlockConfig
from ..dag.node import BaseNode, gather_matching_input_names, implements
from ..output.dockerfile import DockerfileOutput, Script
from ..output.ghworkflow import JobStep
from ..output.makefile import MakefileOutput
from .meta import Meta


@runtime_checkable
class LintTarget(Protocol):
    """Implemented by blocks that are individual lint checks."""

    def lint_command(self) -> str:
        ...


class LinterConfig(BlockConfig):
    command: str = ""
    description: str = ""


class Linter(BaseNode):
    """
    Single lint check, e.g. `lint-markdown`.

    Dockerfile: `lint-<name>` stage on top of `base` running the command.
    Makefile: `lint-<name>` target building that stage.
    """
    Config = LinterConfig
    kind = "Linter"

    def __init__(self, meta: Meta, name: str, command: str = ""):
        super().__init__(f"lint-{name}")
        self.meta = meta
        self.command = command
        self.description = f"Runs {name} linter."

    def lint_command(self) -> str:
        return self.command

    def compile_dockerfile(self, output: DockerfileOutput) -> None:
        if not self.command:
            raise ValueError(f"Linter '{self.name}' has no command configured")

        output.stage(self.name) \
            .from_("base") \
            .description(f"runs {self.name}") \
            .step(Script(self.command))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.target(self.name) \
            .description(self.description) \
            .script("@$(MAKE) target-$@")


class Lint(BaseNode):
    """Aggregates linters into the `lint` target."""

    def __init__(self, meta: Meta):
        super().__init__("lint")
        self.meta = meta

    def linters(self) -> List[str]:
        return gather_matching_input_names(self, implements(LintTarget))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.target("lint") \
            .description("Run all linters for the project.") \
            .depends(*self.linters())

    def workflow_steps(self) -> List[JobStep]:
        return [JobStep(name="lint", run="make lint")]
