# scripture/__init__.py
"""
Scripture verse resolution.

This package provides:
- ScriptureService: single entry point (local corpus or remote provider)
- LocalResolver: lookups against the KJV JSON corpus
- Corpus / LazyCorpus: load-once book index
- BibleApiClient / ApiBibleClient: remote verse services
- daily_reference / random_reference: verse-of-the-day selection
- normalize / parse_reference: caller input normalization
"""

from .corpus import Corpus, LazyCorpus, get_corpus
from .errors import (
    ScriptureError,
    ValidationError,
    MissingField,
    NotANumber,
    OutOfRange,
    InvalidReference,
    InvalidSource,
    NotFoundError,
    BookNotFound,
    ChapterOutOfRange,
    VerseOutOfRange,
    DataIntegrityError,
    UpstreamError,
)
from .models import Book, PassageReference, Reference, ResolvedVerse, format_reference
from .normalizer import normalize, parse_reference
from .remote import ApiBibleClient, BibleApiClient, VerseClient, get_client
from .resolver import LocalResolver
from .selector import daily_reference, day_of_year, random_reference
from .service import ScriptureService, get_service

__all__ = [
    # Façade
    "ScriptureService",
    "get_service",
    # Local
    "LocalResolver",
    "Corpus",
    "LazyCorpus",
    "get_corpus",
    # Remote
    "VerseClient",
    "BibleApiClient",
    "ApiBibleClient",
    "get_client",
    # Selection
    "daily_reference",
    "day_of_year",
    "random_reference",
    # Input
    "normalize",
    "parse_reference",
    # Model
    "Book",
    "Reference",
    "PassageReference",
    "ResolvedVerse",
    "format_reference",
    # Errors
    "ScriptureError",
    "ValidationError",
    "MissingField",
    "NotANumber",
    "OutOfRange",
    "InvalidReference",
    "InvalidSource",
    "NotFoundError",
    "BookNotFound",
    "ChapterOutOfRange",
    "VerseOutOfRange",
    "DataIntegrityError",
    "UpstreamError",
]
