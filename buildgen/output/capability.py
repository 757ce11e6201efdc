"""
Capability Dispatch

Each output format declares one narrow capability: a runtime-checkable
protocol with a single compile method taking the output's accumulator.
Nodes opt into any number of capabilities just by implementing the
methods; there is no node type hierarchy. Dispatching a node to an
output it does not support is a silent no-op.
"""

from typing import Iterable, List
import logging

from ..dag.node import Node

logger = logging.getLogger(__name__)


def capability_method(capability: type) -> str:
    """
    Name of the single compile method a capability protocol declares.

    Raises:
        ValueError: If the protocol does not declare exactly one method
    """
    methods = [
        name for name, value in vars(capability).items()
        if name.startswith("compile_") and callable(value)
    ]
    if len(methods) != 1:
        raise ValueError(
            f"Capability {capability.__name__} must declare exactly one "
            f"compile_* method, found: {methods}"
        )
    return methods[0]


def supports(node: Node, capability: type) -> bool:
    """Check whether a node implements a capability."""
    return isinstance(node, capability)


def dispatch(node: Node, capability: type, accumulator: object) -> bool:
    """
    Invoke the node's capability method with the accumulator, if supported.

    Args:
        node: Node being compiled
        capability: Capability protocol to test for
        accumulator: Output state handed to the node's method

    Returns:
        True if the method was invoked, False if the node was skipped

    Raises:
        Exception: Anything raised by the node's method, unchanged
    """
    if not supports(node, capability):
        logger.debug(f"Node '{node.name}' does not implement {capability.__name__}, skipping")
        return False

    method = getattr(node, capability_method(capability))
    method(accumulator)

    logger.debug(f"Node '{node.name}' compiled via {capability.__name__}")
    return True


def node_capabilities(node: Node, capabilities: Iterable[type]) -> List[type]:
    """List which of the given capabilities a node implements."""
    return [capability for capability in capabilities if supports(node, capability)]


class Output:
    """
    Base class for outputs.

    Subclasses set `capability` to their protocol. compile() is called for
    every node of a walk and forwards to the node when it supports the
    capability; the output instance itself is the accumulator.
    """
    capability: type

    def compile(self, node: Node) -> bool:
        return dispatch(node, self.capability, self)

    def generate(self, root) -> List:
        raise NotImplementedError
