"""
Project Contents

Top-level view of a project: a graph of building blocks that can be
configured and compiled into outputs.
"""

from typing import List, Sequence
import logging

from ..config.loader import ConfigProvider
from ..dag.node import BaseGraph, Node
from ..dag.walker import VisitedSet, walk
from ..output.capability import Output

logger = logging.getLogger(__name__)


class Contents(BaseGraph):
    """
    Project graph.

    Each compile pass walks the whole graph once per output with a fresh
    visited set, so every block contributes to an output at most once and
    only after all of its inputs did.

    Example usage:
        project = Contents()
        project.add_target(all_target, ci)

        project.load_config(ConfigProvider.from_file(Path(".buildgen.yaml")))
        project.compile([DockerfileOutput(), MakefileOutput()])
    """

    def compile(self, outputs: Sequence[Output]) -> None:
        """
        Compile the project into every output.

        Raises:
            Exception: The first failure of any block; later outputs are not compiled
        """
        for output in outputs:
            self.compile_to(output, VisitedSet())

    def compile_to(self, output: Output, visited: VisitedSet) -> List[Node]:
        """
        Compile the project into one output.

        Args:
            output: Output accumulator
            visited: Visited set for this walk

        Returns:
            Nodes that contributed to the output
        """
        contributed: List[Node] = []

        def visit(node: Node) -> None:
            if output.compile(node):
                contributed.append(node)

        walk(self, visit, visited)

        logger.info(
            f"Compiled {type(output).__name__}: "
            f"{len(contributed)} of {len(visited)} nodes contributed"
        )

        return contributed

    def load_config(self, provider: ConfigProvider) -> None:
        """Walk the graph and load the config into every node."""
        walk(self, provider.load)
