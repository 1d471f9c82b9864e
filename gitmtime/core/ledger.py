"""
Directory ledger - maximum commit time seen beneath each directory.
"""

from typing import Dict, Iterator, Optional, Tuple


class DirectoryLedger:
    """Maps directory path to the newest commit time of any resolved descendant."""

    def __init__(self):
        self._store: Dict[str, int] = {}

    def set_if_after(self, directory: str, mtime: int) -> bool:
        """
        Record mtime for directory if it is newer than what is stored.

        Returns:
            True if the stored value changed. Equal times are a no-op.
        """
        current = self._store.get(directory)
        if current is not None and mtime <= current:
            return False
        self._store[directory] = mtime
        return True

    def get(self, directory: str) -> Optional[int]:
        return self._store.get(directory)

    def items(self) -> Iterator[Tuple[str, int]]:
        """Yield (directory, time) pairs in sorted directory order."""
        for directory in sorted(self._store):
            yield directory, self._store[directory]

    def copy(self) -> "DirectoryLedger":
        other = DirectoryLedger()
        other._store = dict(self._store)
        return other

    def to_dict(self) -> Dict[str, int]:
        return dict(self._store)

    def __contains__(self, directory: str) -> bool:
        return directory in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"DirectoryLedger({len(self._store)} directories)"
