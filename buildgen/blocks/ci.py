"""
CI and Contributing Blocks

CI collects workflow steps from every block it (transitively) depends on
into the default GitHub Actions job. Contributing renders a CONTRIBUTING.md
describing the make targets of the project.
"""

from typing import Dict, List, Protocol, runtime_checkable

from ..config.loader import BlockConfig
from ..dag.node import BaseNode, gather_matching_inputs_transitive, implements
from ..output.ghworkflow import DEFAULT_JOB, JobStep, WorkflowOutput
from ..output.makefile import MakefileCompiler
from ..output.template import TemplateFile, TemplateOutput
from .lint import LintTarget
from .meta import Meta

CHECKOUT_ACTION = "actions/checkout@v4"
BUILDX_ACTION = "docker/setup-buildx-action@v3"


@runtime_checkable
class WorkflowStepProvider(Protocol):
    """Implemented by blocks which contribute steps to the CI job."""

    def workflow_steps(self) -> List[JobStep]:
        ...


class CIConfig(BlockConfig):
    runner: str = "ubuntu-latest"


class CI(BaseNode):
    """GitHub Actions workflow building block."""
    Config = CIConfig

    def __init__(self, meta: Meta):
        super().__init__("ci")
        self.meta = meta
        self.runner = "ubuntu-latest"

    def compile_workflow(self, output: WorkflowOutput) -> None:
        output.main_branch = self.meta.main_branch

        job = output.job(DEFAULT_JOB)
        job.runs_on = self.runner
        job.step(JobStep(name="checkout", uses=CHECKOUT_ACTION))
        job.step(JobStep(name="set up docker buildx", uses=BUILDX_ACTION))

        for provider in gather_matching_inputs_transitive(self, implements(WorkflowStepProvider)):
            for step in provider.workflow_steps():
                job.step(step)


CONTRIBUTING_TEMPLATE = """# Contributing to {{ project }}

## Building

{% for target in targets -%}
- `make {{ target }}`
{% endfor %}
{%- if linters %}
## Linting

Run `make lint` before sending changes; it runs:

{% for linter in linters -%}
- `{{ linter }}`
{% endfor %}
{%- endif %}"""


class ContributingConfig(BlockConfig):
    enabled: bool = True


class Contributing(BaseNode):
    """CONTRIBUTING.md rendered from a template."""
    Config = ContributingConfig

    def __init__(self, meta: Meta):
        super().__init__("contributing")
        self.meta = meta
        self.enabled = True

    def context(self) -> Dict[str, object]:
        targets = [
            node.name for node in gather_matching_inputs_transitive(self, implements(MakefileCompiler))
            if node.name not in ("all", "build", "toolchain")
        ]
        linters = [
            node.name for node in gather_matching_inputs_transitive(self, implements(LintTarget))
        ]
        return {"project": self.meta.name, "targets": targets, "linters": linters}

    def compile_template(self, output: TemplateOutput) -> None:
        if not self.enabled:
            return

        output.define(TemplateFile(
            filename="CONTRIBUTING.md",
            template=CONTRIBUTING_TEMPLATE,
            context=self.context(),
            comment_prefix="<!-- ",
            comment_postfix=" -->",
        ))
