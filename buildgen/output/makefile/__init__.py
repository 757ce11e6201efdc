"""
Makefile Output

Makefile rendering: variables, targets and the accumulator.
"""

from .output import (
    MAKEFILE,
    VARIABLE_GROUP_COMMON,
    VARIABLE_GROUP_DOCKER,
    VARIABLE_GROUP_HELP,
    MakefileCompiler,
    MakefileOutput,
    SkipAsMakefileDependency,
)
from .target import Target
from .variable import (
    Variable,
    VariableGroup,
    append_variable,
    multiline_variable,
    overridable_variable,
    recursive_variable,
    simple_variable,
)

__all__ = [
    "MAKEFILE",
    "VARIABLE_GROUP_COMMON",
    "VARIABLE_GROUP_DOCKER",
    "VARIABLE_GROUP_HELP",
    "MakefileCompiler",
    "MakefileOutput",
    "SkipAsMakefileDependency",
    "Target",
    "Variable",
    "VariableGroup",
    "append_variable",
    "multiline_variable",
    "overridable_variable",
    "recursive_variable",
    "simple_variable",
]
