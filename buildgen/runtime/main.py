"""
buildgen - Main Entry Point

Loads the project configuration, assembles the block graph, compiles it
into every output and writes the files that changed.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..blocks.meta import Meta
from ..config.loader import DEFAULT_CONFIG_FILE, ConfigProvider
from ..output import (
    DockerfileOutput,
    FileOutput,
    GitignoreOutput,
    MakefileOutput,
    TemplateOutput,
    WorkflowOutput,
)
from ..project.layout import default_project

logger = logging.getLogger(__name__)


def default_outputs() -> List[FileOutput]:
    """One fresh accumulator per output format."""
    return [
        DockerfileOutput(),
        MakefileOutput(),
        GitignoreOutput(),
        WorkflowOutput(),
        TemplateOutput(),
    ]


def generate(root: Path, config_path: Path, name: Optional[str] = None) -> List[Path]:
    """
    Generate all outputs for the project rooted at root.

    Every output is compiled and rendered before any file is written, so
    a failing block or renderer leaves the working tree untouched.

    Args:
        root: Project root directory
        config_path: Config file (missing file means defaults)
        name: Project name (root directory name if omitted and not configured)

    Returns:
        Paths of the files that were (re)written
    """
    provider = ConfigProvider.from_file(config_path)

    meta = Meta()
    provider.load(meta)
    if name:
        meta.name = name
    if not meta.name:
        meta.name = root.resolve().name

    project = default_project(meta)
    project.load_config(provider)

    outputs = default_outputs()
    project.compile(outputs)

    rendered = [(output, output.render()) for output in outputs]

    written: List[Path] = []
    for output, buffers in rendered:
        written.extend(output.write(buffers, root))

    logger.info(f"Generation finished: {len(written)} files written")

    return written


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildgen", description="Generate build artifacts from a block graph")
    p.add_argument("--root", default=".", help="Project root directory (default: .)")
    p.add_argument("--config", default=None, help=f"Config file (default: <root>/{DEFAULT_CONFIG_FILE})")
    p.add_argument("--name", default=None, help="Project name (default: from config or root directory name)")
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code: 0 on success, 1 if generation failed
    """
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    root = Path(args.root)
    config_path = Path(args.config) if args.config else root / DEFAULT_CONFIG_FILE

    logger.info(f"Root: {root.resolve()}")
    logger.info(f"Config: {config_path}")

    try:
        generate(root, config_path, args.name)
    except Exception as e:
        logger.error(f"Generation failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
