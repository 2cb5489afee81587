# scripture/resolver.py
from typing import List, Optional

from . import config
from .corpus import Corpus, LazyCorpus, get_corpus
from .errors import BookNotFound, ChapterOutOfRange, MissingField, VerseOutOfRange
from .models import Book, PassageReference, Reference, ResolvedVerse
from .normalizer import normalize, normalize_book, parse_number


class LocalResolver:
    """
    Verse lookup against the local corpus.

    Each failure has its own exception type so the message can say exactly
    what was wrong: an unknown book, a chapter past the end of the book, or
    a verse past the end of the chapter.
    """

    def __init__(self, corpus: Optional[LazyCorpus] = None):
        self._corpus = corpus or get_corpus()

    @property
    def corpus(self) -> Corpus:
        return self._corpus.get()

    # ---------- lookups ----------

    def _book(self, requested: str) -> Book:
        if requested is None or not str(requested).strip():
            raise MissingField("book")
        requested = str(requested)
        book = self.corpus.find_book(normalize_book(requested))
        if book is None:
            raise BookNotFound(requested.strip())
        return book

    @staticmethod
    def _verses(book: Book, chapter: int):
        if not 1 <= chapter <= len(book.chapters):
            raise ChapterOutOfRange(chapter, len(book.chapters), book.display_name)
        return book.chapters[chapter - 1]

    @staticmethod
    def _verse_text(verses, chapter: int, verse: int) -> str:
        if not 1 <= verse <= len(verses):
            raise VerseOutOfRange(verse, len(verses), chapter)
        return verses[verse - 1]

    def resolve(self, book, chapter, verse) -> ResolvedVerse:
        """Resolve raw caller input, e.g. ("gn", "1", "1")."""
        ref = normalize(book, chapter, verse)
        return self._resolve(str(book).strip(), ref)

    def resolve_reference(self, ref: Reference) -> ResolvedVerse:
        return self._resolve(ref.book, ref)

    def _resolve(self, requested: str, ref: Reference) -> ResolvedVerse:
        found = self._book(requested)
        verses = self._verses(found, ref.chapter)
        text = self._verse_text(verses, ref.chapter, ref.verse)
        return ResolvedVerse.build(found.display_name, ref.chapter, ref.verse, text)

    def chapter(self, book: str, chapter) -> List[ResolvedVerse]:
        number = parse_number("chapter", chapter)
        found = self._book(book)
        verses = self._verses(found, number)
        return [
            ResolvedVerse.build(found.display_name, number, i, text)
            for i, text in enumerate(verses, start=1)
        ]

    def passage(self, ref: PassageReference) -> List[ResolvedVerse]:
        """Whole chapter, single verse, or inclusive verse range."""
        found = self._book(ref.book)
        verses = self._verses(found, ref.chapter)
        if ref.is_chapter:
            first, last = 1, len(verses)
        else:
            first, last = ref.verse, ref.end_verse or ref.verse
            self._verse_text(verses, ref.chapter, first)
            self._verse_text(verses, ref.chapter, last)
        return [
            ResolvedVerse.build(found.display_name, ref.chapter, v, verses[v - 1])
            for v in range(first, last + 1)
        ]

    # ---------- browsing ----------

    def search(self, query: str, limit: Optional[int] = None) -> List[ResolvedVerse]:
        """
        Plain keyword match: every term must appear in the verse
        (case-insensitive). Results come back in corpus order, unranked,
        capped at ``limit``.
        """
        limit = config.SEARCH_LIMIT if limit is None else limit
        terms = query.casefold().split()
        if not terms or limit <= 0:
            return []

        results = []
        for book in self.corpus.books:
            for c, verses in enumerate(book.chapters, start=1):
                for v, text in enumerate(verses, start=1):
                    folded = text.casefold()
                    if all(term in folded for term in terms):
                        results.append(ResolvedVerse.build(book.display_name, c, v, text))
                        if len(results) >= limit:
                            return results
        return results

    def books(self) -> List[dict]:
        return [
            {"abbrev": b.abbreviation, "name": b.display_name, "chapters": len(b.chapters)}
            for b in self.corpus.books
        ]
