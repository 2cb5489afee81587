# tests/test_service.py
import random
from datetime import date
from unittest.mock import patch

import pytest

from conftest import JOHN_3_16
from scripture.errors import (
    BookNotFound,
    InvalidSource,
    MissingField,
    NotANumber,
    UpstreamError,
    VerseOutOfRange,
)
from scripture.models import Reference
from scripture.selector import daily_reference
from scripture.service import ScriptureService, get_service


class TestSourceSelection:
    """The façade routes to local or remote and returns the same shape."""

    def test_local_by_default(self, service, fake_remote):
        verse = service.resolve("jo", "3", "16")

        assert verse.text == JOHN_3_16
        assert fake_remote.calls == []

    def test_remote(self, service, fake_remote):
        verse = service.resolve(" John ", "3", "16", source="remote")

        assert fake_remote.calls == [("verse", "John", 3, 16)]
        assert verse.reference == "John 3:16"

    def test_remote_gets_caller_spelling(self, service, fake_remote):
        """Remote providers see the book as typed, only trimmed."""
        service.resolve("  1 John ", 4, 8, source="remote")
        assert fake_remote.calls == [("verse", "1 John", 4, 8)]

    def test_same_shape_from_both_sources(self, service):
        local = service.resolve("jo", 3, 16)
        remote = service.resolve("john", 3, 16, source="REMOTE")

        assert type(local) is type(remote)
        assert local.reference == remote.reference

    def test_remote_input_still_validated(self, service, fake_remote):
        with pytest.raises(NotANumber):
            service.resolve("john", "three", "16", source="remote")
        assert fake_remote.calls == []

    def test_unknown_source(self, service):
        with pytest.raises(InvalidSource):
            service.resolve("jo", 3, 16, source="cache")

    def test_local_errors_pass_through(self, service):
        with pytest.raises(BookNotFound):
            service.resolve("xx", 1, 1)

    def test_upstream_errors_pass_through(self, corpus):
        class Broken:
            def fetch_verse(self, book, chapter, verse):
                raise UpstreamError("bible-api.com error 503")

        service = ScriptureService(corpus=corpus, remote=Broken())
        with pytest.raises(UpstreamError):
            service.resolve("john", 3, 16, source="remote")


class TestChapterPassageSearch:
    """Tests for the multi-verse operations."""

    def test_chapter_local(self, service):
        assert len(service.chapter("gn", "1")) == 31

    def test_chapter_remote(self, service, fake_remote):
        verses = service.chapter("psalms", "23", source="remote")

        assert len(verses) == 5
        assert fake_remote.calls == [("chapter", "psalms", 23)]

    def test_chapter_missing_book(self, service):
        with pytest.raises(MissingField):
            service.chapter(None, "1")

    def test_passage_local(self, service):
        refs = [v.reference for v in service.passage("John 3:16-17")]
        assert refs == ["John 3:16", "John 3:17"]

    def test_passage_remote_range_is_one_call(self, service, fake_remote):
        verses = service.passage("John 3:2-4", source="remote")

        assert [v.verse for v in verses] == [2, 3, 4]
        assert fake_remote.calls == [("chapter", "John", 3)]

    def test_passage_remote_single_verse(self, service, fake_remote):
        service.passage("John 3:16", source="remote")
        assert fake_remote.calls == [("verse", "John", 3, 16)]

    def test_passage_remote_range_past_end(self, service, fake_remote):
        # the fake chapter has verses 1-5
        with pytest.raises(VerseOutOfRange) as exc:
            service.passage("John 3:7-9", source="remote")
        assert exc.value.max == 5
        assert exc.value.requested == 7

    def test_passage_remote_range_end_past_end(self, service):
        with pytest.raises(VerseOutOfRange) as exc:
            service.passage("John 3:4-9", source="remote")
        assert exc.value.requested == 9

    def test_passage_local_range_past_end(self, service):
        with pytest.raises(VerseOutOfRange) as exc:
            service.passage("John 3:16-40")
        assert exc.value.max == 18

    def test_search_local(self, service):
        assert service.search("everlasting")[0].reference == "John 3:16"

    def test_search_remote(self, service, fake_remote):
        service.search("  love  ", source="remote")
        assert fake_remote.calls == [("search", "love")]

    def test_search_requires_query(self, service):
        with pytest.raises(MissingField):
            service.search("")


class TestDailyAndRandom:
    """Selector output is resolved through the same path as any request."""

    def test_daily_uses_rotation(self, service, fake_remote):
        day = date(2025, 1, 1)
        ref = daily_reference(day)

        verse = service.daily(day)

        assert fake_remote.calls == [("verse", ref.book, ref.chapter, ref.verse)]
        assert (verse.chapter, verse.verse) == (ref.chapter, ref.verse)

    def test_daily_is_stable(self, service):
        day = date(2025, 7, 4)
        assert service.daily(day) == service.daily(day)

    def test_daily_local(self, service):
        # day 8 -> John 3:16, present in the test corpus
        assert service.daily(date(2025, 1, 8), source="local").text == JOHN_3_16

    def test_random_remote(self, service, fake_remote):
        service.random(rng=random.Random(3))
        assert len(fake_remote.calls) == 1

    def test_random_local_may_miss(self, service):
        """A random pick outside the local corpus is rejected, not patched up."""
        with patch("scripture.service.random_reference") as pick:
            pick.return_value = Reference("Proverbs", 40, 20)
            with pytest.raises(BookNotFound):
                service.random(source="local")


class TestGetService:
    def test_singleton(self):
        assert get_service() is get_service()

    def test_books(self, service):
        assert [b["abbrev"] for b in service.books()] == ["gn", "jo", "ob"]
