"""
Runtime Module

Command-line driver tying configuration, the project graph and outputs together.
"""

from .main import default_outputs, generate, main

__all__ = [
    "default_outputs",
    "generate",
    "main",
]
