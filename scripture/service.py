# scripture/service.py
"""
Single entry point for verse resolution.

ScriptureService picks the local corpus or the configured remote provider
per call and always answers with ResolvedVerse objects or a ScriptureError.
"""

import logging
import random
from datetime import date
from functools import lru_cache
from typing import List, Optional, Union

from .corpus import LazyCorpus
from .errors import InvalidSource, MissingField, VerseOutOfRange
from .models import PassageReference, ResolvedVerse
from .normalizer import normalize, parse_number, parse_reference
from .remote import VerseClient, get_client
from .resolver import LocalResolver
from .selector import daily_reference, random_reference

logger = logging.getLogger(__name__)

LOCAL = "local"
REMOTE = "remote"
SOURCES = (LOCAL, REMOTE)


class ScriptureService:
    """
    Usage:
        service = ScriptureService()

        verse = service.resolve("gn", "1", "1")
        print(verse.reference, verse.text)

        today = service.daily(date.today())
        hits = service.search("love one another", source="remote")
    """

    def __init__(self, corpus: Optional[LazyCorpus] = None, remote: Optional[VerseClient] = None):
        self.local = LocalResolver(corpus)
        self._remote = remote

    @property
    def remote(self) -> VerseClient:
        if self._remote is None:
            self._remote = get_client()
        return self._remote

    @staticmethod
    def _source(source: Optional[str]) -> str:
        source = (source or LOCAL).lower().strip()
        if source not in SOURCES:
            raise InvalidSource(source, SOURCES)
        return source

    def resolve(self, book, chapter, verse, source: str = LOCAL) -> ResolvedVerse:
        source = self._source(source)
        if source == LOCAL:
            return self.local.resolve(book, chapter, verse)

        ref = normalize(book, chapter, verse)
        # Remote providers get the caller's spelling, not the case-folded key.
        return self.remote.fetch_verse(str(book).strip(), ref.chapter, ref.verse)

    def chapter(self, book, chapter, source: str = LOCAL) -> List[ResolvedVerse]:
        source = self._source(source)
        if book is None or not str(book).strip():
            raise MissingField("book")
        number = parse_number("chapter", chapter)
        if source == LOCAL:
            return self.local.chapter(book, number)
        return self.remote.fetch_chapter(str(book).strip(), number)

    def passage(self, ref: Union[str, PassageReference], source: str = LOCAL) -> List[ResolvedVerse]:
        source = self._source(source)
        if not isinstance(ref, PassageReference):
            ref = parse_reference(ref)
        if source == LOCAL:
            return self.local.passage(ref)

        if ref.is_chapter:
            return self.remote.fetch_chapter(ref.book, ref.chapter)
        if ref.end_verse is None:
            return [self.remote.fetch_verse(ref.book, ref.chapter, ref.verse)]
        # One call for the chapter, then cut the range out of it.
        verses = self.remote.fetch_chapter(ref.book, ref.chapter)
        last = max(v.verse for v in verses)
        for requested in (ref.verse, ref.end_verse):
            if requested > last:
                raise VerseOutOfRange(requested, last, ref.chapter)
        return [v for v in verses if ref.verse <= v.verse <= ref.end_verse]

    def search(self, query: str, source: str = LOCAL) -> List[ResolvedVerse]:
        source = self._source(source)
        if query is None or not query.strip():
            raise MissingField("q")
        if source == LOCAL:
            return self.local.search(query.strip())
        return self.remote.search_verses(query.strip())

    def daily(self, on: date, source: str = REMOTE) -> ResolvedVerse:
        ref = daily_reference(on)
        logger.debug(f"Verse of the day for {on.isoformat()}: {ref}")
        return self.resolve(ref.book, ref.chapter, ref.verse, source=source)

    def random(self, source: str = REMOTE, rng: Optional[random.Random] = None) -> ResolvedVerse:
        ref = random_reference(rng)
        return self.resolve(ref.book, ref.chapter, ref.verse, source=source)

    def books(self) -> List[dict]:
        return self.local.books()


@lru_cache(maxsize=1)
def get_service() -> ScriptureService:
    return ScriptureService()
