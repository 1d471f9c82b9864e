"""Tests for helper utilities."""

from gitmtime.utils.helpers import format_timestamp, summarize_paths


class TestFormatTimestamp:
    def test_epoch_is_utc(self):
        assert format_timestamp(0) == "1970-01-01T00:00:00Z"

    def test_custom_format(self):
        assert format_timestamp(1_700_000_000, "%Y") == "2023"

    def test_out_of_range_falls_back(self):
        assert format_timestamp(10 ** 20) == str(10 ** 20)


class TestSummarizePaths:
    def test_short_list(self):
        assert summarize_paths({"b", "a"}) == "a, b"

    def test_elides_long_list(self):
        paths = [f"f{i}" for i in range(7)]
        assert summarize_paths(paths, limit=2) == "f0, f1 (+5 more)"
