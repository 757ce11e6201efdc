"""
Gitignore Output
"""

from typing import List, Protocol, TextIO, runtime_checkable

from .files import FileOutput
from .preamble import preamble

GITIGNORE = ".gitignore"


@runtime_checkable
class GitignoreCompiler(Protocol):
    """Implemented by blocks adding paths to .gitignore."""

    def compile_gitignore(self, output: "GitignoreOutput") -> None:
        ...


class GitignoreOutput(FileOutput):
    """.gitignore generation."""
    capability = GitignoreCompiler

    def __init__(self):
        self.ignored_paths: List[str] = []

    def ignore_path(self, *paths: str) -> "GitignoreOutput":
        for path in paths:
            if path not in self.ignored_paths:
                self.ignored_paths.append(path)
        return self

    def filenames(self) -> List[str]:
        return [GITIGNORE]

    def generate_file(self, filename: str, stream: TextIO) -> None:
        if filename != GITIGNORE:
            raise ValueError(f"Unexpected filename: {filename}")

        stream.write(preamble("# "))

        for path in self.ignored_paths:
            stream.write(f"{path}\n")
