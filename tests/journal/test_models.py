"""Tests for topic naming, entry names and summaries."""

from datetime import date, datetime, timedelta, timezone

import pytest

from journal.models import (
    Entry,
    Point,
    Topic,
    first_line,
    today_entry_name,
    topic_from_line,
    topic_line_name,
    validate_topic_name,
)


class TestTopicNaming:
    @pytest.mark.parametrize("name", ["work", "x", "side-project", "2024", "café", "a.b"])
    def test_round_trip(self, name):
        assert topic_from_line(topic_line_name(name)) == name

    def test_prefix(self):
        assert topic_line_name("work") == "topic/work"

    @pytest.mark.parametrize("line", ["main", "topic/", "topic/a/b", "feature/x", "topics/a"])
    def test_lines_outside_scheme(self, line):
        assert topic_from_line(line) is None

    @pytest.mark.parametrize(
        "name", ["", "  ", "a/b", " padded", "has space", "x..y", ".hidden", "tail.", "n.lock"]
    )
    def test_invalid_names_rejected(self, name):
        with pytest.raises(ValueError):
            validate_topic_name(name)

    def test_topic_value(self):
        assert Topic("work").line_name == "topic/work"
        assert Topic().is_trunk
        assert Topic().line_name == "main"
        assert str(Topic()) == "main"


class TestEntryName:
    def test_format_is_zero_padded(self):
        assert today_entry_name(datetime(2024, 3, 7, 12, tzinfo=timezone.utc)) == "2024-03-07.md"

    def test_uses_utc_date(self):
        # 23:30 at UTC-5 is already the next day in UTC
        late = datetime(2024, 1, 31, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert today_entry_name(late) == "2024-02-01.md"

    def test_default_is_today(self):
        assert today_entry_name() == f"{datetime.now(timezone.utc):%Y-%m-%d}.md"


class TestSummary:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello world\nmore text\n", "Hello world"),
            ("Trailing   \t\nnext", "Trailing"),
            ("Windows line\r\nnext", "Windows line"),
            ("no newline", "no newline"),
            ("", ""),
            ("\nsecond line", ""),
        ],
    )
    def test_first_line(self, text, expected):
        assert first_line(text) == expected

    def test_entry_summary_reads_file(self, tmp_path):
        (tmp_path / "2024-01-01.md").write_text("Hello world\nmore text\n")
        entry = Entry(tmp_path, "2024-01-01.md")
        assert entry.exists()
        assert entry.summary() == "Hello world"

    def test_empty_entry_summary(self, tmp_path):
        (tmp_path / "2024-01-01.md").write_text("")
        assert Entry(tmp_path, "2024-01-01.md").summary() == ""

    def test_missing_entry_raises(self, tmp_path):
        entry = Entry(tmp_path, "2024-01-01.md")
        assert not entry.exists()
        with pytest.raises(FileNotFoundError):
            entry.summary()


class TestEntryDate:
    def test_dated_name(self, tmp_path):
        assert Entry(tmp_path, "2024-02-29.md").date == date(2024, 2, 29)

    @pytest.mark.parametrize("name", ["notes.txt", "2024-13-01.md", "2024-1-1.md"])
    def test_undated_name(self, tmp_path, name):
        assert Entry(tmp_path, name).date is None


class TestPoint:
    def test_summary_and_genesis(self):
        p = Point(
            id="a" * 40,
            message="First line\n\nbody",
            author="A <a@example.com>",
            timestamp=datetime.now(timezone.utc),
        )
        assert p.summary == "First line"
        assert p.short_id == "aaaaaaa"
        assert p.is_genesis
