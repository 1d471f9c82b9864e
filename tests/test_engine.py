"""Tests for the resolution engine."""

import unittest
from typing import Iterator, List

from gitmtime.core.engine import EngineState, ResolutionEngine
from gitmtime.core.record_parser import CommitterTime, FileList

T1 = 1_600_000_000
T2 = 1_700_000_000
T3 = 1_800_000_000


def _commit(epoch: int, *paths: str, sha: str = "0" * 40) -> List[str]:
    """Render one commit the way `git log --pretty=raw --name-only -z` does."""
    return [
        f"commit {sha}",
        f"tree {'1' * 40}",
        f"author A U Thor <a@example.com> {epoch} +0200",
        f"committer C O Mitter <c@example.com> {epoch} +0200",
        "",
        "    message",
        "\x00".join(paths) + "\x00\x00",
    ]


def _stream(*commits: List[str]) -> List[str]:
    lines: List[str] = []
    for c in commits:
        lines.extend(c)
    return lines


class CountingIterator:
    """Iterator that records how many lines were pulled."""

    def __init__(self, lines):
        self._it = iter(lines)
        self.pulled = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = next(self._it)
        self.pulled += 1
        return line


class TestResolution(unittest.TestCase):
    """Newest-first resolution and ledger aggregation."""

    def test_concrete_scenario(self):
        engine = ResolutionEngine(["a/b.txt", "a/c.txt", "d.txt"])
        result = engine.consume(
            _stream(_commit(T2, "a/b.txt"), _commit(T1, "a/b.txt", "a/c.txt", "d.txt"))
        )
        assert result.resolved == {"a/b.txt": T2, "a/c.txt": T1, "d.txt": T1}
        assert result.ledger.get("a") == T2
        assert result.ledger.get(".") == T2
        assert result.unresolved == set()
        assert result.completed

    def test_never_committed_file_is_unresolved(self):
        engine = ResolutionEngine(["a.txt", "e.txt"])
        result = engine.consume(_stream(_commit(T1, "a.txt")))
        assert result.unresolved == {"e.txt"}
        assert "e.txt" not in result.resolved
        assert result.ledger.to_dict() == {".": T1}
        assert not result.completed
        assert engine.state is EngineState.SCANNING

    def test_older_occurrence_never_wins(self):
        engine = ResolutionEngine(["x", "y"])
        result = engine.consume(
            _stream(_commit(T3, "x"), _commit(T2, "x"), _commit(T1, "x", "y"))
        )
        assert result.resolved["x"] == T3
        assert result.resolved["y"] == T1

    def test_untracked_paths_ignored(self):
        engine = ResolutionEngine(["kept.txt"])
        result = engine.consume(_stream(_commit(T2, "deleted.txt", "kept.txt")))
        assert result.resolved == {"kept.txt": T2}
        assert "deleted.txt" not in result.resolved

    def test_ledger_is_exact_maximum(self):
        engine = ResolutionEngine(["a/b/1", "a/b/2", "a/3", "z/4"])
        result = engine.consume(
            _stream(
                _commit(T3, "z/4"),
                _commit(T2, "a/b/1"),
                _commit(T1, "a/b/2", "a/3"),
            )
        )
        assert result.ledger.to_dict() == {"a/b": T2, "a": T2, "z": T3, ".": T3}

    def test_file_list_before_any_committer_resolves_nothing(self):
        engine = ResolutionEngine(["a"])
        result = engine.consume(["a\x00\x00"] + _commit(T1, "a"))
        assert result.resolved == {"a": T1}

    def test_malformed_committer_keeps_previous_time(self):
        engine = ResolutionEngine(["a", "b"])
        lines = _commit(T2, "a") + ["committer broken line", "b\x00\x00"]
        result = engine.consume(lines)
        assert result.resolved == {"a": T2, "b": T2}

    def test_empty_file_list(self):
        engine = ResolutionEngine(["a"])
        result = engine.consume(_stream(_commit(T2), _commit(T1, "a")))
        assert result.resolved == {"a": T1}


class TestEarlyTermination(unittest.TestCase):
    """Stop pulling input once every file is resolved."""

    def test_stops_reading_after_last_resolution(self):
        first = _commit(T2, "a")
        lines = CountingIterator(first + _commit(T1, "a") + ["garbage"] * 100)
        engine = ResolutionEngine(["a"])
        result = engine.consume(lines)
        assert result.completed
        assert lines.pulled == len(first)

    def test_records_after_done_do_not_change_results(self):
        engine = ResolutionEngine(["a"])
        engine.consume(_commit(T1, "a"))
        assert engine.done
        assert engine.feed(CommitterTime(T3)) is True
        assert engine.feed(FileList(["a"])) is True
        engine.consume(["committer C <c@x> 1 +0000", "a\x00\x00"])
        assert engine.result().resolved == {"a": T1}
        assert engine.ledger.to_dict() == {".": T1}

    def test_empty_tracked_set_is_done_without_reading(self):
        lines = CountingIterator(_commit(T1, "a"))
        engine = ResolutionEngine([])
        result = engine.consume(lines)
        assert result.completed
        assert lines.pulled == 0


class TestExclusion(unittest.TestCase):
    """Locally modified files are never pending."""

    def test_modified_file_not_pending_and_unresolved(self):
        engine = ResolutionEngine(["a/b.txt", "a/c.txt", "d.txt"], excluded=["a/c.txt"])
        assert engine.pending == {"a/b.txt", "d.txt"}
        result = engine.consume(
            _stream(_commit(T2, "a/b.txt"), _commit(T1, "a/b.txt", "a/c.txt", "d.txt"))
        )
        assert "a/c.txt" not in result.resolved
        assert result.excluded == {"a/c.txt"}
        assert result.unresolved == set()
        assert result.resolved == {"a/b.txt": T2, "d.txt": T1}

    def test_untracked_exclusion_ignored(self):
        engine = ResolutionEngine(["a"], excluded=["not-tracked"])
        assert engine.excluded == set()
        assert engine.pending == {"a"}


class TestMergeCommits(unittest.TestCase):
    """`git log -m` repeats a merge once per parent."""

    def test_file_in_both_parent_diffs_resolved_once(self):
        merge = "m" * 40
        engine = ResolutionEngine(["shared.txt", "other.txt", "old.txt"])
        result = engine.consume(
            _stream(
                _commit(T3, "shared.txt", sha=merge),
                _commit(T3, "shared.txt", "other.txt", sha=merge),
                _commit(T1, "shared.txt", "old.txt"),
            )
        )
        assert result.resolved == {"shared.txt": T3, "other.txt": T3, "old.txt": T1}
        assert result.ledger.get(".") == T3


class TestIdempotence(unittest.TestCase):
    """Same input, same output."""

    def test_two_runs_agree(self):
        lines = _stream(_commit(T2, "a/b.txt"), _commit(T1, "a/b.txt", "a/c.txt", "d.txt"))
        tracked = ["a/b.txt", "a/c.txt", "d.txt"]
        first = ResolutionEngine(tracked).consume(lines)
        second = ResolutionEngine(tracked).consume(lines)
        assert first.resolved == second.resolved
        assert first.ledger.to_dict() == second.ledger.to_dict()


class TestUntrustedOrder(unittest.TestCase):
    """trust_order=False reduces every occurrence with max()."""

    def test_newest_wins_regardless_of_order(self):
        engine = ResolutionEngine(["a/x", "y"], trust_order=False)
        result = engine.consume(
            _stream(_commit(T1, "a/x"), _commit(T3, "a/x"), _commit(T2, "y"), _commit(T1, "y"))
        )
        assert result.resolved == {"a/x": T3, "y": T2}
        assert result.ledger.to_dict() == {"a": T3, ".": T3}

    def test_reads_whole_stream(self):
        lines = CountingIterator(_commit(T2, "a") + _commit(T1, "a"))
        engine = ResolutionEngine(["a"], trust_order=False)
        result = engine.consume(lines)
        assert lines.pulled == 14
        assert not result.completed
        assert result.unresolved == set()

    def test_result_is_a_snapshot(self):
        engine = ResolutionEngine(["a/x"], trust_order=False)
        engine.consume(_commit(T1, "a/x"))
        snapshot = engine.result()
        engine.consume(_commit(T3, "a/x"))
        assert snapshot.resolved == {"a/x": T1}
        assert snapshot.ledger.to_dict() == {"a": T1, ".": T1}
        assert engine.result().ledger.to_dict() == {"a": T3, ".": T3}
