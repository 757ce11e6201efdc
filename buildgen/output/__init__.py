"""
Output Module

Capability dispatch, the idempotent file writer and the concrete renderers.
"""

from .capability import Output, dispatch, node_capabilities, supports
from .dockerfile import DockerfileCompiler, DockerfileOutput
from .files import PREAMBLE_MARKERS, FileOutput, SkipFile, strip_preamble
from .ghworkflow import WorkflowCompiler, WorkflowOutput
from .gitignore import GitignoreCompiler, GitignoreOutput
from .makefile import MakefileCompiler, MakefileOutput
from .preamble import license_header, preamble, set_preamble
from .template import TemplateCompiler, TemplateOutput

CAPABILITIES = [
    DockerfileCompiler,
    MakefileCompiler,
    GitignoreCompiler,
    WorkflowCompiler,
    TemplateCompiler,
]

__all__ = [
    "CAPABILITIES",
    "Output",
    "dispatch",
    "node_capabilities",
    "supports",
    "DockerfileCompiler",
    "DockerfileOutput",
    "FileOutput",
    "SkipFile",
    "PREAMBLE_MARKERS",
    "strip_preamble",
    "WorkflowCompiler",
    "WorkflowOutput",
    "GitignoreCompiler",
    "GitignoreOutput",
    "MakefileCompiler",
    "MakefileOutput",
    "license_header",
    "preamble",
    "set_preamble",
    "TemplateCompiler",
    "TemplateOutput",
]
