# tests/test_corpus.py
import json
import threading
from unittest.mock import patch

import pytest

from scripture.corpus import Corpus, LazyCorpus
from scripture.errors import DataIntegrityError
from scripture.models import Book


def _book(abbrev, name=None):
    return Book(abbreviation=abbrev, name=name, chapters=(("v1",),))


class TestAliasMap:
    """Tests for book lookup by abbreviation and name."""

    def test_lookup_by_abbreviation_and_name(self, records):
        corpus = Corpus.from_records(records)
        assert corpus.find_book("gn") is corpus.find_book("genesis")

    def test_lookup_is_case_insensitive(self, records):
        corpus = Corpus.from_records(records)
        assert corpus.find_book("GN") is corpus.find_book("gn")
        assert corpus.find_book("GeNeSiS").name == "Genesis"

    def test_no_prefix_matching(self, records):
        corpus = Corpus.from_records(records)
        assert corpus.find_book("gen") is None
        assert corpus.find_book("xx") is None

    def test_book_without_name(self, records):
        corpus = Corpus.from_records(records)
        book = corpus.find_book("ob")
        assert book.name is None
        assert book.display_name == "OB"

    def test_first_registration_wins(self):
        first = _book("jn", "Jonah")
        second = _book("jo", "JN")
        corpus = Corpus([first, second])

        assert corpus.find_book("jn") is first
        assert corpus.find_book("jo") is second

    def test_chapters_are_immutable(self, records):
        book = Corpus.from_records(records).find_book("gn")
        assert isinstance(book.chapters, tuple)
        assert isinstance(book.chapters[0], tuple)


class TestRecordValidation:
    """Malformed records are data-integrity faults."""

    @pytest.mark.parametrize("records", [
        [],
        {"abbrev": "gn"},
        ["gn"],
        [{"name": "Genesis", "chapters": [["v"]]}],
        [{"abbrev": "gn", "chapters": []}],
        [{"abbrev": "gn", "chapters": [[]]}],
        [{"abbrev": "gn", "chapters": [["v", 3]]}],
        [{"abbrev": "gn", "name": 7, "chapters": [["v"]]}],
    ])
    def test_rejects(self, records):
        with pytest.raises(DataIntegrityError):
            Corpus.from_records(records)


class TestLoadFromFile:
    """Tests for reading the JSON data file."""

    def test_loads_file_with_bom(self, corpus_file):
        corpus = Corpus.from_file(corpus_file)
        assert len(corpus) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataIntegrityError) as exc:
            Corpus.from_file(tmp_path / "nope.json")
        assert exc.value.message == "Bible data file not found."

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "kjv.json"
        path.write_text('[{"abbrev": "gn", "chapters": [["In the beginning"')
        with pytest.raises(DataIntegrityError) as exc:
            Corpus.from_file(path)
        assert "invalid JSON" in exc.value.message


class TestLazyCorpus:
    """Tests for the load-once handle."""

    def test_not_loaded_until_first_access(self, corpus_file):
        lazy = LazyCorpus(corpus_file)
        assert not lazy.loaded
        lazy.get()
        assert lazy.loaded

    def test_same_instance_every_time(self, corpus_file):
        lazy = LazyCorpus(corpus_file)
        assert lazy.get() is lazy.get()

    def test_file_read_once(self, corpus_file):
        lazy = LazyCorpus(corpus_file)
        with patch("scripture.corpus.Corpus.from_file", wraps=Corpus.from_file) as loader:
            for _ in range(5):
                lazy.get()
        assert loader.call_count == 1

    def test_concurrent_first_access_builds_once(self, corpus_file):
        lazy = LazyCorpus(corpus_file)
        seen = []
        barrier = threading.Barrier(8)

        def reader():
            barrier.wait()
            seen.append(lazy.get())

        with patch("scripture.corpus.Corpus.from_file", wraps=Corpus.from_file) as loader:
            threads = [threading.Thread(target=reader) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert loader.call_count == 1
        assert len(seen) == 8
        assert all(c is seen[0] for c in seen)
        assert all(len(c) == 3 for c in seen)

    def test_failure_is_sticky(self, tmp_path, records):
        """A broken file keeps failing even after it is fixed on disk."""
        path = tmp_path / "kjv.json"
        path.write_text("not valid json")
        lazy = LazyCorpus(path)

        with pytest.raises(DataIntegrityError):
            lazy.get()

        path.write_text(json.dumps(records))
        with pytest.raises(DataIntegrityError):
            lazy.get()
