"""
Dockerfile Stage

A stage spans from one FROM instruction to the next. Stages know which
other stages they depend on (their FROM image and any COPY --from source),
which is what orders them in the rendered Dockerfile.
"""

from typing import List, TextIO
import re

from .step import Step

_VARIABLE = re.compile(r"\$\{\w*\}")


class Stage:
    """
    Dockerfile stage.

    Example usage:
        stage = Stage("build").from_("base").description("builds the binary")
        stage.step(Run("go", "build", "./..."))
    """

    def __init__(self, name: str):
        self.name = name
        self._from = ""
        self._description = ""
        self.steps: List[Step] = []

    def from_(self, image: str) -> "Stage":
        self._from = image
        return self

    def description(self, description: str) -> "Stage":
        self._description = description
        return self

    def step(self, step: Step) -> "Stage":
        self.steps.append(step)
        return self

    @property
    def base(self) -> str:
        return self._from

    def dependencies(self) -> List[str]:
        """Stage (or image) names this stage requires, FROM first."""
        result = [self._from]
        for step in self.steps:
            result.extend(step.depends())
        return result

    def before(self, other: "Stage") -> bool:
        """
        Whether this stage must be rendered before other.

        A dependency containing ${VAR} refers to a family of stages; it
        matches every stage whose name starts with the non-variable part.
        """
        for dep in other.dependencies():
            sanitized = _VARIABLE.sub("", dep)
            if sanitized != dep and sanitized:
                return self.name.startswith(sanitized)

            if dep == self.name:
                return True

        return False

    def generate(self, stream: TextIO) -> None:
        if self._description:
            stream.write(f"# {self._description}\n")

        stream.write(f"FROM {self._from} AS {self.name}\n")

        for step in self.steps:
            step.generate(stream)

        stream.write("\n")

    def __repr__(self) -> str:
        return f"Stage({self.name!r})"
