"""
pass-craft - File Sink

Appends results to a save file, one line per generated password:

    <ConfigLine> <!-- name,password,site -->

The ConfigLine part is what produced the password, and the result rides
along as an HTML comment. Feeding the file back with --file strips the
comments, so every saved line re-parses to the same identity and hash
settings and regenerates the same password.

When the save file is the input file itself, only the comment is appended;
the config line is already there.

No locking: running several invocations against one save file at the same
time is up to the caller.
"""

import logging
import os
from typing import Iterable

from .config import format_config_line
from .errors import FileWriteFailureError
from .transform import GeneratedPassword


logger = logging.getLogger(__name__)


def html_comment_wrap(text: str) -> str:
    return f"<!-- {text} -->"


def format_saved_line(generated: GeneratedPassword) -> str:
    """ConfigLine for `generated` followed by its result as a comment."""
    config_line = format_config_line(generated.identity, generated.spec)
    return f"{config_line} {html_comment_wrap(generated.result)}"


def _ends_with_newline(path: str) -> bool:
    if os.path.getsize(path) == 0:
        return True
    with open(path, 'rb') as f:
        f.seek(-1, os.SEEK_END)
        return f.read(1) == b"\n"


def save_results(path: str, lines: Iterable[str]) -> int:
    """
    Append lines to `path`, creating the file and its directory if needed.

    Args:
        path: Save file
        lines: Already formatted lines, without trailing newlines

    Returns:
        Number of lines written

    Raises:
        FileWriteFailureError: On any OS-level failure
    """
    lines = list(lines)
    try:
        parent = os.path.dirname(path)
        if parent and not os.path.exists(parent):
            os.makedirs(parent, exist_ok=True)

        needs_newline = os.path.exists(path) and not _ends_with_newline(path)
        with open(path, 'a', encoding='utf-8') as f:
            if needs_newline:
                f.write("\n")
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        raise FileWriteFailureError(f"{path}: {e.strerror or e}") from e

    logger.info("Appended %d line(s) to %s", len(lines), path)
    return len(lines)
