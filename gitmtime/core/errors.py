"""
Error taxonomy for git-set-mtime.

Every fatal condition derives from SetMtimeError so the CLI can report it
with a single handler. Malformed history lines are not errors and never
raise.
"""

from typing import Optional, Sequence


class SetMtimeError(Exception):
    """Base class for all fatal git-set-mtime errors."""


class ConfigError(SetMtimeError):
    """A configuration value has the wrong type."""


class EnumerationError(SetMtimeError):
    """Tracked or locally-modified files could not be listed."""


class StreamStartError(SetMtimeError):
    """The history producer could not be started."""


class ProducerExitError(SetMtimeError):
    """The history producer exited with a failure status."""

    def __init__(self, argv: Sequence[str], returncode: int):
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(f"{' '.join(self.argv)} exited with status {returncode}")


class TimestampWriteError(SetMtimeError):
    """Setting atime/mtime on a path failed."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        reason = cause.strerror if cause is not None and cause.strerror else str(cause)
        super().__init__(f"{reason} on {path}")
