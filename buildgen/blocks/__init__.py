"""
Building Blocks

Concrete node types implementing the output capabilities.
"""

from .all import All, MakeHelp
from .binary import Binary, Image
from .build import Build
from .ci import CI, Contributing, WorkflowStepProvider
from .lint import Lint, Linter, LintTarget
from .meta import Meta, ProjectConfig
from .toolchain import Toolchain

__all__ = [
    "All",
    "MakeHelp",
    "Binary",
    "Image",
    "Build",
    "CI",
    "Contributing",
    "WorkflowStepProvider",
    "Lint",
    "Linter",
    "LintTarget",
    "Meta",
    "ProjectConfig",
    "Toolchain",
]
