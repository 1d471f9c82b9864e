"""
Resolution engine - newest commit time per tracked file.

The engine consumes the history stream record by record. It relies on the
stream being ordered newest-first (which `git log` guarantees for its
default ordering): the first commit that names a pending file is the most
recent one, so the file is resolved then and never looked at again. Once
no file is pending the engine is done and stops pulling lines, which lets
the caller cancel the producer instead of reading the whole history.

If that ordering cannot be trusted, construct the engine with
trust_order=False. Every occurrence is then reduced with max() and the
scan always runs to the end of the stream.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Set

from .ledger import DirectoryLedger
from .propagator import propagate
from .record_parser import CommitterTime, FileList, Record, iter_records

logger = logging.getLogger("git-set-mtime.engine")


class EngineState(Enum):
    SCANNING = "scanning"
    DONE = "done"


@dataclass
class ScanResult:
    """Outcome of one scan."""

    resolved: Dict[str, int] = field(default_factory=dict)
    unresolved: Set[str] = field(default_factory=set)
    excluded: Set[str] = field(default_factory=set)
    ledger: DirectoryLedger = field(default_factory=DirectoryLedger)
    records_read: int = 0
    completed: bool = False


class ResolutionEngine:
    """Resolves tracked files against a newest-first commit record stream."""

    def __init__(
        self,
        tracked: Iterable[str],
        excluded: Iterable[str] = (),
        trust_order: bool = True,
    ):
        tracked_set = set(tracked)
        self.excluded: Set[str] = tracked_set.intersection(excluded)
        self.pending: Set[str] = tracked_set - self.excluded
        self.resolved: Dict[str, int] = {}
        self.ledger = DirectoryLedger()
        self.trust_order = trust_order
        self.records_read = 0
        self._current_time: Optional[int] = None
        self._state = EngineState.SCANNING
        self._check_done()

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is EngineState.DONE

    def _check_done(self) -> None:
        if self.trust_order and not self.pending and self._state is EngineState.SCANNING:
            self._state = EngineState.DONE
            logger.debug("All files resolved after %d records", self.records_read)

    def feed(self, record: Record) -> bool:
        """
        Apply one parsed record.

        Returns:
            True once the engine is done. Records fed after that are ignored.
        """
        if self.done:
            return True
        self.records_read += 1
        if isinstance(record, CommitterTime):
            self._current_time = record.epoch
        elif isinstance(record, FileList):
            self._resolve(record.paths)
        self._check_done()
        return self.done

    def _resolve(self, paths: Iterable[str]) -> None:
        mtime = self._current_time
        if mtime is None:
            # Paths before any committer header have no time to attach.
            return
        for path in paths:
            if path in self.pending:
                self.pending.discard(path)
                self.resolved[path] = mtime
                propagate(self.ledger, path, mtime)
            elif not self.trust_order and path in self.resolved:
                if mtime > self.resolved[path]:
                    self.resolved[path] = mtime
                    propagate(self.ledger, path, mtime)

    def consume(self, lines: Iterable[str]) -> ScanResult:
        """
        Drive the scan over a line stream until done or exhausted.

        Records are pulled lazily, so nothing past the record that emptied
        the pending set is read from the line iterator.
        """
        if not self.done:
            for record in iter_records(lines):
                if self.feed(record):
                    break
        return self.result()

    def result(self) -> ScanResult:
        """Snapshot of the scan so far; later records do not change it."""
        return ScanResult(
            resolved=dict(self.resolved),
            unresolved=set(self.pending),
            excluded=set(self.excluded),
            ledger=self.ledger.copy(),
            records_read=self.records_read,
            completed=self.done,
        )
