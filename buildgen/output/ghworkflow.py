"""
GitHub Workflow Output

Accumulates CI jobs and steps from the nodes that implement WorkflowCompiler
and renders them as a GitHub Actions workflow. Jobs are ordered so that every
job follows the jobs it needs, keeping the rendered YAML stable and readable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, TextIO, runtime_checkable
import logging

import yaml

from ..toposort import stable_sort
from .files import FileOutput
from .preamble import preamble

logger = logging.getLogger(__name__)

CI_WORKFLOW = ".github/workflows/ci.yaml"
DEFAULT_JOB = "default"
DEFAULT_RUNNER = "ubuntu-latest"


@runtime_checkable
class WorkflowCompiler(Protocol):
    """Implemented by blocks contributing jobs or steps to the CI workflow."""

    def compile_workflow(self, output: "WorkflowOutput") -> None:
        ...


class _LiteralDumper(yaml.SafeDumper):
    """Dumps multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _represent_str)


@dataclass
class JobStep:
    """Single step of a job: either a shell command or an action."""
    name: str
    run: Optional[str] = None
    uses: Optional[str] = None
    with_: Dict[str, str] = field(default_factory=dict)
    env: Dict[str, str] = field(default_factory=dict)
    condition: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.condition:
            data["if"] = self.condition
        if self.uses:
            data["uses"] = self.uses
        if self.with_:
            data["with"] = dict(self.with_)
        if self.env:
            data["env"] = dict(self.env)
        if self.run:
            data["run"] = self.run
        return data


@dataclass
class Job:
    """Workflow job."""
    name: str
    runs_on: str = DEFAULT_RUNNER
    needs: List[str] = field(default_factory=list)
    steps: List[JobStep] = field(default_factory=list)
    condition: Optional[str] = None

    def step(self, step: JobStep) -> "Job":
        self.steps.append(step)
        return self

    def before(self, other: "Job") -> bool:
        return self.name in other.needs

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"runs-on": self.runs_on}
        if self.needs:
            data["needs"] = list(self.needs)
        if self.condition:
            data["if"] = self.condition
        data["steps"] = [step.to_dict() for step in self.steps]
        return data


class WorkflowOutput(FileOutput):
    """
    GitHub Actions CI workflow generation.

    Example usage:
        output = WorkflowOutput(main_branch="main")
        output.job("default").step(JobStep(name="build", run="make"))
    """
    capability = WorkflowCompiler

    def __init__(self, main_branch: str = "main", name: str = "default"):
        self.main_branch = main_branch
        self.name = name
        self.jobs: Dict[str, Job] = {}

    def job(self, name: str) -> Job:
        """Return the job with this name, creating it on first use."""
        if name not in self.jobs:
            self.jobs[name] = Job(name=name)
        return self.jobs[name]

    def add_step(self, step: JobStep, job: str = DEFAULT_JOB) -> "WorkflowOutput":
        self.job(job).step(step)
        return self

    def filenames(self) -> List[str]:
        return [CI_WORKFLOW]

    def workflow(self) -> Dict[str, Any]:
        """
        Workflow document as plain data.

        Raises:
            CycleError: If jobs need each other circularly
        """
        ordered = stable_sort(list(self.jobs.values())).raise_for_cycle(lambda job: job.name)

        return {
            "name": self.name,
            "concurrency": {
                "group": "${{ github.head_ref || github.run_id }}",
                "cancel-in-progress": True,
            },
            "on": {
                "push": {"branches": [self.main_branch, "release-*"], "tags": ["v*"]},
                "pull_request": {"branches": [self.main_branch, "release-*"]},
            },
            "jobs": {job.name: job.to_dict() for job in ordered},
        }

    def generate_file(self, filename: str, stream: TextIO) -> None:
        if filename != CI_WORKFLOW:
            raise ValueError(f"Unexpected filename: {filename}")

        stream.write(preamble("# "))
        yaml.dump(
            self.workflow(),
            stream,
            Dumper=_LiteralDumper,
            sort_keys=False,
            default_flow_style=False,
        )
