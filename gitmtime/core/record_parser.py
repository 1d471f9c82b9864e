"""
Commit record parser for `git log --pretty=raw --name-only -z` output.

Each line of the stream is classified on its own: a committer header
carries the commit time, a line containing NUL separators carries the
paths touched by that commit, and everything else (commit/tree/parent
headers, message lines, blanks) is ignored.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from .constants import COMMITTER_RE, END_OF_LIST, PATH_SEPARATOR


@dataclass(frozen=True)
class CommitterTime:
    """Committer timestamp in seconds since the epoch (UTC)."""

    epoch: int


@dataclass(frozen=True)
class FileList:
    """Paths touched by one commit (or one parent diff of a merge)."""

    paths: List[str] = field(default_factory=list)


Record = Union[CommitterTime, FileList]


def parse_committer(line: str) -> Optional[CommitterTime]:
    """Extract the epoch from a committer line; the UTC offset is dropped."""
    m = COMMITTER_RE.match(line)
    if not m:
        return None
    return CommitterTime(int(m.group(1)))


def parse_file_list(line: str) -> FileList:
    """
    Split a NUL-separated path list.

    Only the part before the first doubled separator belongs to the current
    commit; what follows is the start of the next record's header.
    """
    head = line.split(END_OF_LIST, 1)[0].rstrip(PATH_SEPARATOR)
    return FileList([p for p in head.split(PATH_SEPARATOR) if p])


def parse_record(line: str) -> Optional[Record]:
    """Classify one line of the history stream, or return None to skip it."""
    if PATH_SEPARATOR in line:
        return parse_file_list(line)
    return parse_committer(line)


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """Lazily parse lines, dropping the ones that are not records."""
    for line in lines:
        record = parse_record(line)
        if record is not None:
            yield record
