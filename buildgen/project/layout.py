"""
Project Layout

Assembles the default block graph from the project metadata. Which blocks
exist (binaries, images, linters) comes from the `Project` config document;
everything else about them is tuned by their own config documents.
"""

from typing import Optional
import logging

from ..blocks import (
    CI,
    All,
    Binary,
    Build,
    Contributing,
    Image,
    Lint,
    Linter,
    MakeHelp,
    Meta,
    Toolchain,
)
from ..dag.registry import NodeRegistry
from .contents import Contents

logger = logging.getLogger(__name__)


def setup_node_registry() -> NodeRegistry:
    """
    Set up node registry and register all available block kinds.

    Returns:
        Configured NodeRegistry with all block kinds registered
    """
    registry = NodeRegistry()

    for block in (Toolchain, Build, Linter, Lint, Binary, Image, All, MakeHelp, CI, Contributing):
        registry.register(block)

    logger.debug(f"Registered {len(registry.list_kinds())} block kinds: {registry.list_kinds()}")

    return registry


def default_project(meta: Meta, registry: Optional[NodeRegistry] = None) -> Contents:
    """
    Build the default project graph.

    Wiring (arrows point at dependencies):
        toolchain <- build <- lint-* <- lint
                           <- <binary> <- image-<binary>
        all <- lint, binaries, images
        ci, contributing <- all

    Args:
        meta: Project metadata
        registry: Block registry (the default one if omitted)

    Returns:
        Project graph with all, help, ci and contributing as targets

    Raises:
        ValueError: If an image names a binary that is not declared, or two
            blocks end up with the same name
    """
    registry = registry or setup_node_registry()

    toolchain = registry.create("Toolchain", meta)
    build = registry.create("Build", meta)
    build.add_input(toolchain)

    lint = registry.create("Lint", meta)
    for linter_name, command in meta.linters.items():
        linter = registry.create("Linter", meta, linter_name, command)
        linter.add_input(build)
        lint.add_input(linter)

    binaries = []
    for binary_name in meta.binaries:
        binary = registry.create("Binary", meta, binary_name)
        binary.add_input(build)
        binaries.append(binary)

    images = []
    for image_name in meta.images:
        binary = registry.get(image_name)
        if not isinstance(binary, Binary):
            raise ValueError(f"Image '{image_name}' has no matching binary")
        image = registry.create("Image", meta, image_name)
        image.add_input(binary)
        images.append(image)

    all_target = registry.create("All", meta)
    all_target.add_input(lint, *binaries, *images)

    ci = registry.create("CI", meta)
    ci.add_input(all_target)

    contributing = registry.create("Contributing", meta)
    contributing.add_input(all_target)

    project = Contents()
    project.add_target(all_target, registry.create("MakeHelp", meta), ci, contributing)

    logger.info(
        f"Assembled project '{meta.name}': {len(binaries)} binaries, "
        f"{len(images)} images, {len(meta.linters)} linters"
    )

    return project
