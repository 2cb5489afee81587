# scripture/remote.py
"""
Adapters over external verse services.

Every adapter exposes the same three calls (fetch_verse, fetch_chapter,
search_verses) and returns ResolvedVerse objects shaped exactly like the
local resolver's, so callers cannot tell where a verse came from.

One outbound request per call, no retries, no caching. Anything that goes
wrong on the wire or in the payload becomes an UpstreamError.
"""

import logging
import re
from typing import List, Optional
from urllib.parse import quote

import requests

from . import config
from .books import usfm_code
from .errors import BookNotFound, UpstreamError
from .models import ResolvedVerse

logger = logging.getLogger(__name__)

REFERENCE_RE = re.compile(r"^(?P<book>.+?)\s+(?P<chapter>\d+)(?::(?P<verse>\d+))?")
VERSE_MARK_RE = re.compile(r"\[(\d+)\]")


def _strip_html(s: str) -> str:
    return re.sub(r"<[^>]+>", "", s or "")


def _clean(text: str) -> str:
    return " ".join(_strip_html(text).split())


class VerseClient:
    """Shared plumbing for remote verse services."""

    name = "remote"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = config.REQUEST_TIMEOUT if timeout is None else timeout

    def fetch_verse(self, book: str, chapter: int, verse: int) -> ResolvedVerse:
        raise NotImplementedError

    def fetch_chapter(self, book: str, chapter: int) -> List[ResolvedVerse]:
        raise NotImplementedError

    def search_verses(self, query: str) -> List[ResolvedVerse]:
        raise NotImplementedError

    def _upstream(self, cause: str) -> UpstreamError:
        logger.warning(f"{self.name}: {cause}")
        return UpstreamError(cause)

    def _get_json(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> dict:
        # Plain requests.get: each call owns its connection.
        try:
            r = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise self._upstream(f"{self.name} request failed: {e.__class__.__name__}")
        if r.status_code != 200:
            raise self._upstream(f"{self.name} error {r.status_code}")
        try:
            payload = r.json()
        except ValueError:
            raise self._upstream(f"{self.name} returned a non-JSON response")
        if not isinstance(payload, dict):
            raise self._upstream(f"{self.name} returned an unexpected response")
        return payload

    def _verse(self, book, chapter, verse, text) -> ResolvedVerse:
        if not isinstance(book, str) or not book.strip() or not isinstance(text, str):
            raise self._upstream(f"{self.name} returned an incomplete verse record")
        try:
            return ResolvedVerse.build(book.strip(), int(chapter), int(verse), _clean(text))
        except (TypeError, ValueError):
            raise self._upstream(f"{self.name} returned an incomplete verse record")


# ---------- bible-api.com ----------

class BibleApiClient(VerseClient):
    """
    bible-api.com. Passage responses look like:

        {"reference": "John 3:16",
         "verses": [{"book_name": "John", "chapter": 3, "verse": 16, "text": "..."}],
         "text": "..."}
    """

    name = "bible-api.com"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.base_url = (base_url or config.BIBLE_API_BASE).rstrip("/")

    def _records(self, payload: dict) -> List[ResolvedVerse]:
        verses = payload.get("verses")
        if not isinstance(verses, list):
            raise self._upstream(f"{self.name} response has no verses")
        out = []
        for v in verses:
            if not isinstance(v, dict):
                raise self._upstream(f"{self.name} returned an incomplete verse record")
            out.append(self._verse(
                v.get("book_name") or payload.get("book_name"),
                v.get("chapter") or payload.get("chapter"),
                v.get("verse"),
                v.get("text"),
            ))
        return out

    def _passage(self, ref: str) -> List[ResolvedVerse]:
        url = f"{self.base_url}/{quote(ref, safe='+:')}"
        return self._records(self._get_json(url, params={"formatting": "plain"}))

    def fetch_verse(self, book: str, chapter: int, verse: int) -> ResolvedVerse:
        verses = self._passage(f"{book}+{chapter}:{verse}")
        if not verses:
            raise self._upstream(f"{self.name} returned no verse for {book} {chapter}:{verse}")
        # The service may hand back more than was asked for; keep the first.
        return verses[0]

    def fetch_chapter(self, book: str, chapter: int) -> List[ResolvedVerse]:
        verses = self._passage(f"{book}+{chapter}")
        if not verses:
            raise self._upstream(f"{self.name} returned no verses for {book} {chapter}")
        return verses

    def search_verses(self, query: str) -> List[ResolvedVerse]:
        payload = self._get_json(
            f"{self.base_url}/search",
            params={"q": query, "formatting": "plain"},
        )
        return self._records(payload)


# ---------- api.bible ----------

class ApiBibleClient(VerseClient):
    """
    api.bible (scripture.api.bible). Books are addressed by USFM code,
    e.g. /bibles/{bibleId}/verses/JHN.3.16, and every call needs an api-key.
    """

    name = "api.bible"

    def __init__(
        self,
        api_key: Optional[str] = None,
        bible_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(timeout)
        self.api_key = api_key if api_key is not None else config.API_BIBLE_KEY
        self.bible_id = bible_id or config.API_BIBLE_ID
        self.base_url = (base_url or config.API_BIBLE_BASE).rstrip("/")

    def _get(self, path: str, params: dict) -> dict:
        if not self.api_key:
            raise self._upstream("Server missing API_BIBLE_KEY")
        payload = self._get_json(
            f"{self.base_url}/bibles/{self.bible_id}/{path}",
            params=params,
            headers={"api-key": self.api_key},
        )
        data = payload.get("data")
        if not isinstance(data, dict):
            raise self._upstream(f"{self.name} response has no data")
        return data

    @staticmethod
    def _code(book: str) -> str:
        code = usfm_code(book)
        if code is None:
            raise BookNotFound(book.strip())
        return code

    def _book_name(self, reference) -> str:
        m = REFERENCE_RE.match(reference or "")
        if not m:
            raise self._upstream(f"{self.name} returned an unreadable reference: {reference!r}")
        return m.group("book")

    def fetch_verse(self, book: str, chapter: int, verse: int) -> ResolvedVerse:
        data = self._get(
            f"verses/{self._code(book)}.{chapter}.{verse}",
            {
                "content-type": "text",
                "include-notes": "false",
                "include-titles": "false",
                "include-chapter-numbers": "false",
                "include-verse-numbers": "false",
            },
        )
        return self._verse(self._book_name(data.get("reference")), chapter, verse, data.get("content"))

    def fetch_chapter(self, book: str, chapter: int) -> List[ResolvedVerse]:
        data = self._get(
            f"chapters/{self._code(book)}.{chapter}",
            {
                "content-type": "text",
                "include-notes": "false",
                "include-titles": "false",
                "include-chapter-numbers": "false",
                "include-verse-numbers": "true",
            },
        )
        name = self._book_name(data.get("reference"))
        # Content reads "[1] In the beginning ... [2] And the earth ..."
        parts = VERSE_MARK_RE.split(data.get("content") or "")
        verses = [
            self._verse(name, chapter, number, text)
            for number, text in zip(parts[1::2], parts[2::2])
        ]
        if not verses:
            raise self._upstream(f"{self.name} returned no verses for {book} {chapter}")
        return verses

    def search_verses(self, query: str) -> List[ResolvedVerse]:
        data = self._get("search", {"query": query, "limit": config.SEARCH_LIMIT})
        out = []
        for v in data.get("verses") or []:
            m = REFERENCE_RE.match((v or {}).get("reference") or "")
            if not m or not m.group("verse"):
                raise self._upstream(f"{self.name} returned an incomplete verse record")
            out.append(self._verse(m.group("book"), m.group("chapter"), m.group("verse"), v.get("text")))
        return out


PROVIDERS = {
    "bibleapi": BibleApiClient,
    "apibible": ApiBibleClient,
}


def get_client(name: Optional[str] = None) -> VerseClient:
    name = (name or config.REMOTE_PROVIDER).lower().strip()
    if name not in PROVIDERS:
        raise ValueError(f"Unknown verse provider: {name} (expected one of {', '.join(PROVIDERS)})")
    return PROVIDERS[name]()
