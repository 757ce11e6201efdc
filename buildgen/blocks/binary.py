"""
Binary and Image Blocks

Binary compiles one command in a build stage and exports the result from
a scratch stage, so `make <name>` can drop it into the artifacts
directory. Image packages a binary into a runnable container image.
"""

from typing import List

from pydantic import Field

from ..config.loader import BlockConfig
from ..dag.node import BaseNode
from ..output.dockerfile import Copy, DockerfileOutput, Entrypoint, Script
from ..output.ghworkflow import JobStep
from ..output.makefile import MakefileOutput
from .meta import Meta


class BinaryConfig(BlockConfig):
    build_command: str = Field("", alias="buildCommand")
    output_path: str = Field("", alias="outputPath")


class Binary(BaseNode):
    """
    Binary building block.

    Dockerfile: `<name>-build` stage on `base` running the build command,
    then a `<name>` scratch stage holding only the produced file.
    Makefile: `<name>` target exporting it into $(ARTIFACTS).
    """
    Config = BinaryConfig
    kind = "Binary"

    def __init__(self, meta: Meta, name: str):
        super().__init__(name)
        self.meta = meta
        self.build_command = f"make -C src {name}"
        self.output_path = f"/src/bin/{name}"

    @property
    def artifact(self) -> str:
        return f"/{self.name}"

    def compile_dockerfile(self, output: DockerfileOutput) -> None:
        output.stage(f"{self.name}-build") \
            .from_("base") \
            .description(f"builds {self.name}") \
            .step(Script(self.build_command))

        output.stage(self.name) \
            .from_("scratch") \
            .step(Copy(self.output_path, self.artifact).from_(f"{self.name}-build"))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.target(self.name) \
            .description(f"Builds {self.name} into $(ARTIFACTS).") \
            .depends("$(ARTIFACTS)") \
            .script("@$(MAKE) local-$@ DEST=$(ARTIFACTS)")

    def workflow_steps(self) -> List[JobStep]:
        return [JobStep(name=self.name, run=f"make {self.name}")]


class ImageConfig(BlockConfig):
    base_image: str = Field("scratch", alias="baseImage")
    entrypoint: List[str] = Field(default_factory=list)
    push: bool = True


class Image(BaseNode):
    """
    Container image building block.

    Must have exactly one Binary input; the image copies that binary from
    its export stage.
    """
    Config = ImageConfig
    kind = "Image"

    def __init__(self, meta: Meta, name: str):
        super().__init__(f"image-{name}")
        self.meta = meta
        self.image_name = name
        self.base_image = "scratch"
        self.entrypoint: List[str] = []
        self.push = True

    def binary(self) -> Binary:
        binaries = [node for node in self.inputs() if isinstance(node, Binary)]
        if len(binaries) != 1:
            raise ValueError(
                f"Image '{self.name}' needs exactly one binary input, got {len(binaries)}"
            )
        return binaries[0]

    def compile_dockerfile(self, output: DockerfileOutput) -> None:
        binary = self.binary()
        entrypoint = self.entrypoint or [binary.artifact]

        output.stage(self.name) \
            .from_(self.base_image) \
            .description(f"{self.image_name} container image") \
            .step(Copy(binary.artifact, binary.artifact).from_(binary.name)) \
            .step(Entrypoint(*entrypoint))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.target(self.name) \
            .description(f"Builds the {self.image_name} container image.") \
            .script(
                f"@$(MAKE) target-$@ TARGET_ARGS=\"--tag=$(REGISTRY)/$(USERNAME)/{self.image_name}:$(IMAGE_TAG)\""
            )

    def workflow_steps(self) -> List[JobStep]:
        steps = [JobStep(name=self.name, run=f"make {self.name}")]

        if self.push:
            steps.append(JobStep(
                name=f"push-{self.image_name}",
                run=f"make {self.name}",
                env={"PUSH": "true"},
                condition=f"github.event_name != 'pull_request' && github.ref == 'refs/heads/{self.meta.main_branch}'",
            ))

        return steps
