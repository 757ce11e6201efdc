"""
Build Block

Common build environment: artifact directory, version variables, the
docker buildx invocation targets use, and the `base` stage holding the
project sources on top of the toolchain.
"""

from typing import List

from pydantic import Field

from ..config.loader import BlockConfig
from ..dag.node import BaseNode
from ..output.dockerfile import Arg, Copy, DockerfileOutput, WorkDir
from ..output.gitignore import GitignoreOutput
from ..output.makefile import (
    VARIABLE_GROUP_COMMON,
    VARIABLE_GROUP_DOCKER,
    MakefileOutput,
    overridable_variable,
    recursive_variable,
    simple_variable,
)
from .meta import Meta


class BuildConfig(BlockConfig):
    artifacts_path: str = Field("_out", alias="artifactsPath")
    ignored_paths: List[str] = Field(default_factory=list, alias="ignoredPaths")


class Build(BaseNode):
    """
    Build building block.

    Every other block depends on it (directly or through the toolchain),
    so its variables and the `base` stage are always in place first.
    """
    Config = BuildConfig

    def __init__(self, meta: Meta):
        super().__init__("build")
        self.meta = meta
        self.artifacts_path = "_out"
        self.ignored_paths: List[str] = []

        for arg in ("ARTIFACTS", "SHA", "TAG", "ABBREV_TAG"):
            if arg not in meta.build_args:
                meta.build_args.append(arg)

    def compile_dockerfile(self, output: DockerfileOutput) -> None:
        for arg in self.meta.build_args:
            output.arg(Arg(arg))

        output.allow_local_path(*self.meta.directories)
        output.allow_local_path(*self.meta.source_files)

        stage = output.stage("base").from_("toolchain").description("sources on top of the toolchain")
        stage.step(WorkDir("/src"))

        for path in self.meta.source_files:
            stage.step(Copy(f"./{path}", f"./{path}"))

        for directory in self.meta.directories:
            stage.step(Copy(f"./{directory}", f"./{directory}"))

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.variable_group(VARIABLE_GROUP_COMMON) \
            .variable(simple_variable("SHA", "$(shell git describe --match=none --always --abbrev=8 --dirty)")) \
            .variable(simple_variable("TAG", "$(shell git describe --tag --always --dirty --match v[0-9]\\*)")) \
            .variable(simple_variable("ABBREV_TAG", "$(shell git describe --tag --always --match v[0-9]\\* --abbrev=0)")) \
            .variable(simple_variable("BRANCH", "$(shell git rev-parse --abbrev-ref HEAD)")) \
            .variable(simple_variable("ARTIFACTS", self.artifacts_path)) \
            .variable(overridable_variable("REGISTRY", self.meta.registry)) \
            .variable(overridable_variable("USERNAME", self.meta.username or self.meta.name)) \
            .variable(overridable_variable("IMAGE_TAG", "$(TAG)"))

        build_args = " ".join(f"--build-arg={arg}=\"$({arg})\"" for arg in self.meta.build_args)

        output.variable_group(VARIABLE_GROUP_DOCKER) \
            .variable(simple_variable("BUILD", "docker buildx build")) \
            .variable(overridable_variable("PLATFORM", "linux/amd64")) \
            .variable(overridable_variable("PROGRESS", "auto")) \
            .variable(overridable_variable("PUSH", "false")) \
            .variable(recursive_variable(
                "COMMON_ARGS",
                "--file=Dockerfile\n--provenance=false\n--progress=$(PROGRESS)\n"
                "--platform=$(PLATFORM)\n--push=$(PUSH)" + (f"\n{build_args}" if build_args else ""),
            ))

        output.target("$(ARTIFACTS)") \
            .description("Creates artifacts directory.") \
            .script("@mkdir -p $(ARTIFACTS)")

        output.target("target-%") \
            .description("Builds the specified target defined in the Dockerfile.") \
            .script("@$(BUILD) --target=$* $(COMMON_ARGS) $(TARGET_ARGS) .")

        output.target("local-%") \
            .description("Builds the specified target and exports its output to DEST.") \
            .script("@$(MAKE) target-$* TARGET_ARGS=\"--output=type=local,dest=$(DEST) $(TARGET_ARGS)\"")

        output.target("clean") \
            .description("Cleans up all artifacts.") \
            .script("@rm -rf $(ARTIFACTS)") \
            .phony()

    def compile_gitignore(self, output: GitignoreOutput) -> None:
        output.ignore_path(self.artifacts_path)
        output.ignore_path(*self.ignored_paths)
