"""
Git collaborators - file enumeration and the history stream producer.

Every command runs at the repository top level so that `git ls-files`
and `git log --name-only` report paths relative to the same root.
"""

import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import IO, Iterator, List, Optional, Sequence, Union

from .constants import (
    GIT_HISTORY_ARGS,
    GIT_MODIFIED_ARGS,
    GIT_TOPLEVEL_ARGS,
    GIT_TRACKED_ARGS,
    PATH_SEPARATOR,
)
from .errors import EnumerationError, ProducerExitError, StreamStartError

logger = logging.getLogger("git-set-mtime.git")

_NUL = PATH_SEPARATOR.encode()


def _split_nul(output: bytes) -> List[str]:
    """Split NUL-terminated git output into decoded paths."""
    return [os.fsdecode(p) for p in output.rstrip(_NUL).split(_NUL) if p]


def _run_git(argv: Sequence[str], cwd: Optional[Union[str, Path]] = None) -> bytes:
    """Run a short git command and return its stdout."""
    try:
        result = subprocess.run(list(argv), cwd=cwd, capture_output=True, check=False)
    except OSError as e:
        raise EnumerationError(f"cannot run {' '.join(argv)}: {e}") from e
    if result.returncode != 0:
        detail = os.fsdecode(result.stderr).strip() or f"exit status {result.returncode}"
        raise EnumerationError(f"{' '.join(argv)}: {detail}")
    return result.stdout


class HistoryStream:
    """
    A producer process whose stdout is read line by line.

    Lines are returned without their trailing newline and may be of any
    length. The consumer may cancel() at any point; a producer that then dies
    of SIGPIPE is treated as a clean exit by wait().
    """

    def __init__(self, argv: Sequence[str], cwd: Optional[Union[str, Path]] = None):
        self.argv = list(argv)
        self.cwd = cwd
        self.cancelled = False
        self._process: Optional[subprocess.Popen] = None

    def start(self) -> "HistoryStream":
        try:
            self._process = subprocess.Popen(self.argv, cwd=self.cwd, stdout=subprocess.PIPE)
        except OSError as e:
            raise StreamStartError(f"cannot start {' '.join(self.argv)}: {e}") from e
        if self._process.stdout is None:
            raise StreamStartError(f"no output stream for {' '.join(self.argv)}")
        return self

    @property
    def stdout(self) -> IO[bytes]:
        if self._process is None or self._process.stdout is None:
            raise StreamStartError("history stream not started")
        return self._process.stdout

    def lines(self) -> Iterator[str]:
        for raw in self.stdout:
            yield os.fsdecode(raw.rstrip(b"\n"))

    def cancel(self) -> None:
        """Close the read side; the producer gets SIGPIPE on its next write."""
        self.cancelled = True
        self.stdout.close()

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode if self._process is not None else None

    @property
    def exited_by_broken_pipe(self) -> bool:
        code = self.returncode
        # Killed by the signal, or a shell wrapper reporting 128 + signum.
        return code is not None and code in (-signal.SIGPIPE, 128 + signal.SIGPIPE)

    def wait(self) -> int:
        """
        Reap the producer.

        Raises:
            ProducerExitError: on any failure other than SIGPIPE after cancel().
        """
        if self._process is None:
            raise StreamStartError("history stream not started")
        if not self.stdout.closed:
            self.stdout.close()
        code = self._process.wait()
        if code == 0:
            return code
        if self.cancelled and self.exited_by_broken_pipe:
            logger.debug("%s stopped by broken pipe after cancel", self.argv[0])
            return code
        raise ProducerExitError(self.argv, code)

    def __enter__(self) -> "HistoryStream":
        if self._process is None:
            self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._process is None or self._process.returncode is not None:
            return
        # Error path: don't leave the producer running or unreaped.
        self.cancelled = True
        if not self.stdout.closed:
            self.stdout.close()
        if self._process.poll() is None:
            self._process.kill()
        self._process.wait()


class GitRepository:
    """Thin wrapper over the git commands the pipeline needs."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    @classmethod
    def discover(cls, path: Optional[Union[str, Path]] = None) -> "GitRepository":
        """Find the top level of the repository containing path (default: cwd)."""
        out = _run_git(GIT_TOPLEVEL_ARGS, cwd=path)
        root = os.fsdecode(out).rstrip("\n")
        if not root:
            raise EnumerationError("git did not report a repository top level")
        return cls(root)

    def tracked_files(self) -> List[str]:
        return _split_nul(_run_git(GIT_TRACKED_ARGS, cwd=self.root))

    def modified_files(self) -> List[str]:
        return _split_nul(_run_git(GIT_MODIFIED_ARGS, cwd=self.root))

    def open_history(self) -> HistoryStream:
        return HistoryStream(GIT_HISTORY_ARGS, cwd=self.root).start()
