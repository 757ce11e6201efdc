"""
Project Module

The project graph, its default layout and compilation.
"""

from .contents import Contents
from .layout import default_project, setup_node_registry

__all__ = [
    "Contents",
    "default_project",
    "setup_node_registry",
]
