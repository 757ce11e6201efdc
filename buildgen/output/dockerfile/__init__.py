"""
Dockerfile Output

Dockerfile and .dockerignore rendering: stages, steps and the accumulator.
"""

from .output import DOCKERFILE, DOCKERIGNORE, DockerfileCompiler, DockerfileOutput
from .stage import Stage
from .step import Arg, Copy, Entrypoint, Env, Run, Script, Step, WorkDir

__all__ = [
    "DOCKERFILE",
    "DOCKERIGNORE",
    "DockerfileCompiler",
    "DockerfileOutput",
    "Stage",
    "Arg",
    "Copy",
    "Entrypoint",
    "Env",
    "Run",
    "Script",
    "Step",
    "WorkDir",
]
