"""
Makefile Targets
"""

from typing import List, TextIO


class Target:
    """
    Makefile target.

    Example usage:
        Target("lint").depends("lint-golangci").description("Run all linters.").phony()
    """

    def __init__(self, name: str):
        self.name = name
        self.dependencies: List[str] = []
        self._description = ""
        self.script_lines: List[str] = []
        self.is_phony = False

    def depends(self, *targets: str) -> "Target":
        self.dependencies.extend(targets)
        return self

    def description(self, description: str) -> "Target":
        self._description = description
        return self

    def phony(self) -> "Target":
        self.is_phony = True
        return self

    def script(self, *lines: str) -> "Target":
        for line in lines:
            self.script_lines.extend(line.strip().split("\n"))
        return self

    def generate(self, stream: TextIO) -> None:
        if self.is_phony:
            stream.write(f".PHONY: {self.name}\n")

        depends = " ".join(self.dependencies)
        if depends:
            depends = " " + depends

        description = f"  ## {self._description}" if self._description else ""

        stream.write(f"{self.name}:{depends}{description}\n")

        for line in self.script_lines:
            stream.write(f"\t{line.rstrip(' ')}\n")

        stream.write("\n")
