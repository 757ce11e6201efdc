"""
buildgen

Build-artifact generator. Models a project's build pipeline as a DAG of
building blocks and renders it into Dockerfiles, Makefiles, CI workflows
and other generated files.

- dag: node/graph model, walker, node registry
- toposort: stable topological sort
- output: capability dispatch, idempotent file writer, renderers
- config: YAML configuration provider
- blocks: concrete building blocks
- project: the project graph and its compilation
- runtime: command-line driver
"""

__version__ = "0.1.0"
