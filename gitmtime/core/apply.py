"""
Apply phase - write resolved commit times to the filesystem.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..utils.helpers import format_timestamp
from .engine import ScanResult
from .errors import TimestampWriteError

logger = logging.getLogger("git-set-mtime.apply")


class TimestampWriter:
    """Sets atime and mtime of repository paths without following symlinks."""

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root) if root is not None else None
        self.written = 0

    def _target(self, path: str) -> Union[str, Path]:
        return self.root / path if self.root is not None else path

    def write(self, path: str, mtime: int) -> None:
        """
        Set both timestamps of path to mtime in a single utime call.

        Raises:
            TimestampWriteError: naming path, if the call fails.
        """
        try:
            os.utime(self._target(path), (mtime, mtime), follow_symlinks=False)
        except OSError as e:
            raise TimestampWriteError(path, e) from e
        self.written += 1
        logger.debug("%s -> %s", path, format_timestamp(mtime))


def apply_times(result: ScanResult, writer: TimestampWriter, directories: bool = True) -> int:
    """
    Write every resolved file, then every ledger directory.

    Stops at the first failure; the error is propagated to the caller.

    Returns:
        Number of paths written.
    """
    start = writer.written
    for path in sorted(result.resolved):
        writer.write(path, result.resolved[path])
    if directories:
        for directory, mtime in result.ledger.items():
            writer.write(directory, mtime)
    return writer.written - start
