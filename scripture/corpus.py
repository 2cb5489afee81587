# scripture/corpus.py
"""
Process-wide index over the static Bible data file.

The file is a JSON array of book records:

    [{"abbrev": "gn", "name": "Genesis", "chapters": [["In the beginning..."], ...]}, ...]

It is read once, on first use, and never touched again. A missing or
malformed file is remembered and re-raised on every later access; fixing
it means restarting the process.
"""

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional, Union

from . import config
from .errors import DataIntegrityError
from .models import Book

logger = logging.getLogger(__name__)


def _book_from_record(index: int, record) -> Book:
    where = f"book #{index + 1}"
    if not isinstance(record, dict):
        raise DataIntegrityError(f"Bible data file is malformed: {where} is not an object.")

    abbrev = record.get("abbrev")
    if not isinstance(abbrev, str) or not abbrev.strip():
        raise DataIntegrityError(f"Bible data file is malformed: {where} has no 'abbrev'.")
    where = f"book '{abbrev}'"

    name = record.get("name")
    if name is not None and not isinstance(name, str):
        raise DataIntegrityError(f"Bible data file is malformed: {where} has a non-string 'name'.")

    chapters = record.get("chapters")
    if not isinstance(chapters, list) or not chapters:
        raise DataIntegrityError(f"Bible data file is malformed: {where} has no chapters.")
    for number, verses in enumerate(chapters, start=1):
        if not isinstance(verses, list) or not verses:
            raise DataIntegrityError(
                f"Bible data file is malformed: {where} chapter {number} has no verses."
            )
        if not all(isinstance(v, str) for v in verses):
            raise DataIntegrityError(
                f"Bible data file is malformed: {where} chapter {number} has non-text verses."
            )

    return Book(
        abbreviation=abbrev.strip(),
        name=name.strip() if name and name.strip() else None,
        chapters=tuple(tuple(verses) for verses in chapters),
    )


class Corpus:
    """
    Immutable collection of books with a case-insensitive alias map.

    Each book is registered under its abbreviation and, when present, its
    full name. The first book to claim an alias keeps it.
    """

    def __init__(self, books: Iterable[Book]):
        self.books = tuple(books)

        aliases = {}
        for book in self.books:
            for key in book.aliases:
                if key in aliases:
                    if aliases[key] is not book:
                        logger.warning(
                            "Alias %r of %s already taken by %s; keeping the first",
                            key, book.display_name, aliases[key].display_name,
                        )
                    continue
                aliases[key] = book
        self._aliases = MappingProxyType(aliases)

    def __len__(self) -> int:
        return len(self.books)

    def find_book(self, normalized_id: str) -> Optional[Book]:
        return self._aliases.get(normalized_id.strip().casefold())

    @classmethod
    def from_records(cls, records) -> "Corpus":
        if not isinstance(records, list) or not records:
            raise DataIntegrityError("Bible data file is malformed: expected a non-empty list of books.")
        return cls(_book_from_record(i, r) for i, r in enumerate(records))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Corpus":
        path = Path(path)
        if not path.is_file():
            raise DataIntegrityError("Bible data file not found.")
        try:
            # Published KJV dumps start with a BOM.
            with open(path, encoding="utf-8-sig") as f:
                records = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DataIntegrityError("Bible data file is corrupted or invalid JSON format.") from e
        except OSError as e:
            raise DataIntegrityError(f"Bible data file could not be read: {e.strerror}") from e
        return cls.from_records(records)


class LazyCorpus:
    """
    Load-once handle on a corpus file.

    ``get()`` builds the corpus under a lock the first time it is called.
    Readers see either nothing or the finished index; a failed load is
    cached and raised again on every call.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._corpus: Optional[Corpus] = None
        self._error: Optional[DataIntegrityError] = None

    @property
    def loaded(self) -> bool:
        return self._corpus is not None or self._error is not None

    def get(self) -> Corpus:
        corpus = self._corpus
        if corpus is not None:
            return corpus

        with self._lock:
            if self._corpus is None and self._error is None:
                try:
                    corpus = Corpus.from_file(self.path)
                except DataIntegrityError as e:
                    logger.error(f"Failed to load Bible data from {self.path}: {e.message}")
                    self._error = e
                else:
                    logger.info(f"Loaded {len(corpus)} books from {self.path}")
                    self._corpus = corpus

        if self._error is not None:
            raise self._error
        return self._corpus


_default: Optional[LazyCorpus] = None
_default_lock = threading.Lock()


def get_corpus() -> LazyCorpus:
    """Process-wide corpus handle for the configured data file."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = LazyCorpus(config.CORPUS_PATH)
    return _default
