"""Core git-set-mtime modules: history resolution and timestamp application."""

from .apply import TimestampWriter, apply_times
from .config_loader import load_config
from .engine import EngineState, ResolutionEngine, ScanResult
from .errors import (
    ConfigError,
    EnumerationError,
    ProducerExitError,
    SetMtimeError,
    StreamStartError,
    TimestampWriteError,
)
from .git import GitRepository, HistoryStream
from .ledger import DirectoryLedger
from .record_parser import CommitterTime, FileList, parse_record

__all__ = [
    "CommitterTime",
    "ConfigError",
    "DirectoryLedger",
    "EngineState",
    "EnumerationError",
    "FileList",
    "GitRepository",
    "HistoryStream",
    "ProducerExitError",
    "ResolutionEngine",
    "ScanResult",
    "SetMtimeError",
    "StreamStartError",
    "TimestampWriteError",
    "TimestampWriter",
    "apply_times",
    "load_config",
    "parse_record",
]
