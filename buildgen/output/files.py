"""
Idempotent File Output

Renders every file of an output into memory first, then compares each
rendering with what is already on disk, ignoring the leading preamble.
Files are only rewritten when their meaningful content changed, so
repeated generation does not disturb version control, file watchers
or build caches.
"""

from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple
import io
import logging
import os
import tempfile

from .capability import Output

logger = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = 0o644

PREAMBLE_MARKERS = ("#", "<!--")


class SkipFile(Exception):
    """Raised by generate_file() to leave a file out of this generation."""


def split_lines(text: str) -> List[str]:
    """
    Split on "\\n" only, dropping one trailing "\\r" per line.

    Form feeds, vertical tabs and other Unicode line breaks stay inside
    their line, so changing them is a content change.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def strip_preamble(text: str, markers: Tuple[str, ...] = PREAMBLE_MARKERS) -> List[str]:
    """
    Split content into lines, dropping the leading preamble.

    The preamble is any run of lines at the very start that are blank,
    comments (starting with one of the markers) or YAML document
    markers ("---").

    Args:
        text: File content
        markers: Comment prefixes, "#" and "<!--" by default

    Returns:
        Remaining lines, without line terminators
    """
    lines = split_lines(text)

    for index, line in enumerate(lines):
        if line == "" or line == "---" or line.startswith(markers):
            continue
        return lines[index:]

    return []


def _read_existing(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return ""


def _write_atomic(path: Path, content: str, permissions: int) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.chmod(tmp_name, permissions)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class FileOutput(Output):
    """
    Output rendered into one or more files.

    Subclasses implement:
    - filenames(): paths (relative to the generation root) to produce
    - generate_file(filename, stream): write full content to the stream

    and may override permissions(filename) to set a file mode, or
    preamble_markers(filename) when the file uses another comment syntax.

    Example usage:
        output = GitignoreOutput()
        project.compile([output])
        written = output.generate(Path("."))
    """

    def filenames(self) -> List[str]:
        raise NotImplementedError

    def generate_file(self, filename: str, stream: TextIO) -> None:
        raise NotImplementedError

    def permissions(self, filename: str) -> int:
        return DEFAULT_PERMISSIONS

    def preamble_markers(self, filename: str) -> Tuple[str, ...]:
        """Line prefixes treated as preamble comments in this file."""
        return PREAMBLE_MARKERS

    def render(self) -> Dict[str, str]:
        """
        Render every file into memory.

        Returns:
            Mapping of filename to full content, skipped files omitted

        Raises:
            Exception: Anything raised while rendering; nothing is written
        """
        buffers: Dict[str, str] = {}

        for filename in self.filenames():
            buf = io.StringIO()
            try:
                self.generate_file(filename, buf)
            except SkipFile:
                logger.debug(f"Skipping {filename}")
                continue

            buffers[filename] = buf.getvalue()

        return buffers

    def generate(self, root: Optional[Path] = None) -> List[Path]:
        """
        Write changed files under root.

        All files are rendered before any is written. A file is rewritten
        only if its content minus the preamble differs from what is on disk.

        Args:
            root: Directory filenames are relative to (current directory if omitted)

        Returns:
            Paths that were actually written
        """
        return self.write(self.render(), root)

    def write(self, buffers: Dict[str, str], root: Optional[Path] = None) -> List[Path]:
        """
        Write already rendered files under root, skipping unchanged ones.

        Args:
            buffers: Mapping of filename to content, as returned by render()
            root: Directory filenames are relative to (current directory if omitted)

        Returns:
            Paths that were actually written
        """
        root = Path(root) if root is not None else Path(".")
        written: List[Path] = []

        for filename, content in buffers.items():
            path = root / filename

            markers = self.preamble_markers(filename)
            old_lines = strip_preamble(_read_existing(path), markers)
            new_lines = strip_preamble(content, markers)

            if old_lines == new_lines:
                logger.debug(f"{path} is up to date")
                continue

            path.parent.mkdir(parents=True, exist_ok=True)

            permissions = self.permissions(filename) or DEFAULT_PERMISSIONS
            _write_atomic(path, content, permissions)

            logger.info(f"Wrote {path}")
            written.append(path)

        return written
