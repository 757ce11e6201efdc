"""
Project Metadata

Settings shared by every building block of a project. The driver fills it
from the `Project` config document before the graph is assembled.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from pydantic import Field

from ..config.loader import BlockConfig


class ProjectConfig(BlockConfig):
    """Configuration of the `Project` kind"""
    name: str = ""
    main_branch: str = Field("main", alias="mainBranch")
    registry: str = "ghcr.io"
    username: str = ""
    directories: List[str] = Field(default_factory=lambda: ["src"])
    source_files: List[str] = Field(default_factory=list, alias="sourceFiles")
    binaries: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    linters: Dict[str, str] = Field(default_factory=dict)


@dataclass
class Meta:
    """
    Shared project settings.

    Meta is also the target of the `Project` config document, which is
    why it exposes the ProjectConfig model as its Config.
    """
    Config = ProjectConfig
    kind = "Project"

    name: str = ""
    main_branch: str = "main"
    registry: str = "ghcr.io"
    username: str = ""
    directories: List[str] = field(default_factory=lambda: ["src"])
    source_files: List[str] = field(default_factory=list)
    binaries: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    linters: Dict[str, str] = field(default_factory=dict)
    build_args: List[str] = field(default_factory=list)
