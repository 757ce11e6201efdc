"""
Generated File Preamble

Header block written at the top of every generated file. The preamble
carries volatile metadata (generation time, tool version), which is why
the file writer ignores it when deciding whether a file changed.
"""

from datetime import datetime, timezone
from typing import Optional

from .. import __version__

_PREAMBLE = """
THIS FILE WAS AUTOMATICALLY GENERATED, PLEASE DO NOT EDIT.

Generated on {timestamp} by {creator}.
"""

_LICENSE = """
This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at http://mozilla.org/MPL/2.0/.
"""

_timestamp: Optional[datetime] = None
_creator: Optional[str] = None


def set_preamble(timestamp: Optional[datetime] = None, creator: Optional[str] = None) -> None:
    """
    Pin the values embedded in the preamble.

    Passing None restores the default (current UTC time, tool name and version).
    """
    global _timestamp, _creator
    _timestamp = timestamp
    _creator = creator


def _comment_lines(text: str, comment_prefix: str, postfix: str = "") -> str:
    lines = text.strip().split("\n")
    return "\n".join((comment_prefix + line + postfix).strip() for line in lines)


def preamble(comment_prefix: str, *comment_postfixes: str) -> str:
    """
    Render the auto-generated preamble.

    Args:
        comment_prefix: Comment marker prepended to every line (e.g. "# ")
        comment_postfixes: Appended to every line (e.g. " -->" for markdown)

    Returns:
        Commented preamble followed by a blank line
    """
    global _timestamp, _creator

    if _timestamp is None:
        _timestamp = datetime.now(timezone.utc).replace(microsecond=0)

    if _creator is None:
        _creator = f"buildgen {__version__}"

    text = _PREAMBLE.format(
        timestamp=_timestamp.strftime("%Y-%m-%dT%H:%M:%SZ"),
        creator=_creator,
    )

    return _comment_lines(text, comment_prefix, " ".join(comment_postfixes)) + "\n\n"


def license_header(comment_prefix: str) -> str:
    """Render the MPL-2.0 license header with the given comment prefix."""
    return _comment_lines(_LICENSE, comment_prefix) + "\n\n"
