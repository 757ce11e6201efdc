"""
Toolchain Block

Base image every build stage starts from. Declares the `toolchain`
Dockerfile stage and exposes the image to the Makefile.
"""

from typing import Dict, List

from pydantic import Field

from ..config.loader import BlockConfig
from ..dag.node import BaseNode
from ..output.dockerfile import DockerfileOutput, Env, Script
from ..output.makefile import VARIABLE_GROUP_COMMON, MakefileOutput, overridable_variable
from .meta import Meta

DEFAULT_TOOLCHAIN_IMAGE = "docker.io/alpine:3.20"


class ToolchainConfig(BlockConfig):
    image: str = DEFAULT_TOOLCHAIN_IMAGE
    setup: List[str] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)


class Toolchain(BaseNode):
    """
    Toolchain building block.

    Dockerfile: `toolchain` stage from the configured image, setting its
    environment and running any setup script lines. Makefile: overridable
    TOOLCHAIN variable.
    """
    Config = ToolchainConfig

    def __init__(self, meta: Meta):
        super().__init__("toolchain")
        self.meta = meta
        self.image = DEFAULT_TOOLCHAIN_IMAGE
        self.setup: List[str] = []
        self.env: Dict[str, str] = {}

    def compile_dockerfile(self, output: DockerfileOutput) -> None:
        stage = output.stage("toolchain").from_(self.image).description("build toolchain")

        for name, value in self.env.items():
            stage.step(Env(name, value))

        for line in self.setup:
            stage.step(Script(line))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.variable_group(VARIABLE_GROUP_COMMON).variable(
            overridable_variable("TOOLCHAIN", self.image)
        )
