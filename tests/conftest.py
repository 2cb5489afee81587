# tests/conftest.py
import json
import sys
from pathlib import Path

import pytest
from httpx import AsyncClient, ASGITransport

sys.path.insert(0, str(Path(__file__).parent.parent))

from scripture.corpus import LazyCorpus
from scripture.models import ResolvedVerse
from scripture.service import ScriptureService, get_service
from server import app


JOHN_3_16 = (
    "For God so loved the world, that he gave his only begotten Son, that whosoever "
    "believeth in him should not perish, but have everlasting life."
)


def _genesis():
    chapters = [[f"Genesis {c}:{v} text." for v in range(1, 4)] for c in range(1, 51)]
    chapters[0] = [f"Genesis 1:{v} text." for v in range(1, 32)]
    chapters[0][0] = "In the beginning God created the heaven and the earth."
    chapters[0][2] = "And God said, Let there be light: and there was light."
    return chapters


def _john():
    chapters = [[f"John {c}:{v} text." for v in range(1, 19)] for c in range(1, 4)]
    chapters[0][0] = "In the beginning was the Word, and the Word was with God, and the Word was God."
    chapters[2][15] = JOHN_3_16
    return chapters


@pytest.fixture
def records():
    """Small corpus in the KJV JSON layout."""
    return [
        {"abbrev": "gn", "name": "Genesis", "chapters": _genesis()},
        {"abbrev": "jo", "name": "John", "chapters": _john()},
        {"abbrev": "ob", "chapters": [["The vision of Obadiah.", "We have heard a rumour from the LORD."]]},
    ]


@pytest.fixture
def corpus_file(tmp_path, records):
    path = tmp_path / "kjv.json"
    # Written with a BOM like the published KJV dumps.
    path.write_text(json.dumps(records), encoding="utf-8-sig")
    return path


@pytest.fixture
def corpus(corpus_file):
    return LazyCorpus(corpus_file)


@pytest.fixture
def fake_remote():
    """Stand-in remote provider that records its calls."""
    return FakeRemote()


@pytest.fixture
def service(corpus, fake_remote):
    return ScriptureService(corpus=corpus, remote=fake_remote)


@pytest.fixture
async def client(service):
    """Async test client wired to the test corpus and fake remote."""
    app.dependency_overrides[get_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class FakeRemote:
    name = "fake"

    def __init__(self):
        self.calls = []

    def fetch_verse(self, book, chapter, verse):
        self.calls.append(("verse", book, chapter, verse))
        return ResolvedVerse.build(book.title(), chapter, verse, f"remote {book} {chapter}:{verse}")

    def fetch_chapter(self, book, chapter):
        self.calls.append(("chapter", book, chapter))
        return [
            ResolvedVerse.build(book.title(), chapter, v, f"remote {book} {chapter}:{v}")
            for v in range(1, 6)
        ]

    def search_verses(self, query):
        self.calls.append(("search", query))
        return [ResolvedVerse.build("John", 13, 34, f"... {query} ...")]
