"""Tests for seeding a store from reference text."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from journal.seed import (
    build_entries,
    commit_entries,
    daily_entries,
    escape_markdown,
    fetch_text,
    parse_contents,
    split_paragraphs,
    split_works,
    topic_slug,
)

SAMPLE = (
    "The Project Gutenberg eBook\r\n"
    "\r\n"
    "Contents\r\n"
    "\r\n"
    "    THE SONNETS\r\n"
    "    THE TEMPEST\r\n"
    "\r\n"
    "\r\n"
    "THE SONNETS\r\n"
    "\r\n"
    "                    1\r\n"
    "\r\n"
    "From fairest creatures we desire increase,\r\n"
    "That thereby beauty's rose might never die,\r\n"
    "\r\n"
    "                    2\r\n"
    "\r\n"
    "When forty winters shall besiege thy brow,\r\n"
    "\r\n"
    "THE TEMPEST\r\n"
    "\r\n"
    "*Enter* a Master and a Boatswain.\r\n"
)


class TestParsing:
    def test_parse_contents(self):
        titles, offset = parse_contents(SAMPLE.replace("\r\n", "\n"))
        assert titles == ["THE SONNETS", "THE TEMPEST"]
        assert offset > 0

    def test_parse_contents_missing(self):
        with pytest.raises(ValueError):
            parse_contents("no table here")

    def test_split_works(self):
        text = SAMPLE.replace("\r\n", "\n")
        titles, offset = parse_contents(text)
        works = split_works(text[offset:], titles)
        assert list(works) == titles
        assert "fairest creatures" in works["THE SONNETS"]
        assert "Boatswain" not in works["THE SONNETS"]
        assert "Boatswain" in works["THE TEMPEST"]

    def test_split_works_missing_title(self):
        with pytest.raises(ValueError):
            split_works("THE SONNETS\nbody\n", ["THE SONNETS", "HAMLET"])

    def test_escape_markdown(self):
        assert escape_markdown("*Enter* beauty's #1 _x_ `y`") == (
            r"\*Enter\* beauty\'s \#1 \_x\_ \`y\`"
        )

    def test_split_paragraphs_drops_number_lines(self):
        text = "Title\n\n    1\n\nFirst line,\nsecond line\n\n   2\n\nThird\n"
        assert split_paragraphs(text) == ["Title", "First line,\nsecond line", "Third"]

    @pytest.mark.parametrize(
        "title,slug",
        [
            ("THE SONNETS", "the-sonnets"),
            ("ALL’S WELL THAT ENDS WELL", "alls-well-that-ends-well"),
            ("THE LIFE OF KING HENRY V / PART 1", "the-life-of-king-henry-v-part-1"),
        ],
    )
    def test_topic_slug(self, title, slug):
        assert topic_slug(title) == slug


class TestDailyEntries:
    def test_one_paragraph_per_day_when_short(self):
        entries = daily_entries("HAMLET", ["a", "b", "c"], start=date(2020, 1, 1))
        assert list(entries) == ["2020-01-01.md", "2020-01-02.md", "2020-01-03.md"]
        assert entries["2020-01-01.md"].startswith("Working on HAMLET\n\n")

    def test_spreads_over_a_year(self):
        paragraphs = [f"p{i}" for i in range(800)]
        entries = daily_entries("HAMLET", paragraphs)
        # 800 // 365 == 2 paragraphs per day
        assert len(entries) == 400
        assert entries["2020-01-01.md"] == "Working on HAMLET\n\np0\n\np1\n"
        assert "2021-02-03.md" in entries

    def test_build_entries(self):
        data = build_entries(SAMPLE)
        assert sorted(data) == ["the-sonnets", "the-tempest"]
        first = data["the-tempest"]["2020-01-01.md"]
        assert first.split("\n", 1)[0] == "Working on THE TEMPEST"
        all_tempest = "".join(data["the-tempest"].values())
        assert r"\*Enter\*" in all_tempest


class TestCommit:
    def test_commit_entries(self, memory_store):
        data = build_entries(SAMPLE)
        commits, topics = commit_entries(memory_store, data)

        assert topics == 2
        assert commits == sum(len(v) for v in data.values())
        assert sorted(memory_store.list_topics()) == ["the-sonnets", "the-tempest"]

        memory_store.switch_topic("the-sonnets")
        history = memory_store.history()
        assert len(history) == len(data["the-sonnets"]) + 1
        assert all(p.summary == "Working on THE SONNETS" for p in history[:-1])
        assert memory_store.list_entries() == sorted(data["the-sonnets"])


class TestFetch:
    def test_uses_cache(self, tmp_path):
        cache = tmp_path / "shakespeare.txt"
        cache.write_text("cached text")
        with patch("journal.seed.httpx.get") as get:
            assert fetch_text(cache) == "cached text"
        get.assert_not_called()

    def test_downloads_once(self, tmp_path):
        cache = tmp_path / "shakespeare.txt"
        resp = MagicMock(text="downloaded")
        with patch("journal.seed.httpx.get", return_value=resp) as get:
            assert fetch_text(cache, url="https://example.com/t.txt") == "downloaded"
            assert fetch_text(cache, url="https://example.com/t.txt") == "downloaded"
        get.assert_called_once()
        resp.raise_for_status.assert_called_once()
        assert cache.read_text() == "downloaded"
