# scripture/normalizer.py
"""
Turns raw caller input into canonical references.

Pure functions: no I/O, no corpus access. Whether a book actually exists
is decided later by the corpus index.
"""

import re

from .errors import InvalidReference, MissingField, NotANumber, OutOfRange
from .models import PassageReference, Reference

INT_RE = re.compile(r"^-?[0-9]+$")

# "John 3", "John 3:16", "1 John 3:16-18", "Song of Solomon 2:1"
PASSAGE_RE = re.compile(
    r"""
    ^\s*
    (?P<book>[1-3]?\s*[A-Za-z][A-Za-z.]*(?:\s+[A-Za-z]+)*)
    \s+
    (?P<chapter>\d+)
    (?:
        :(?P<verse>\d+)
        (?:\s*-\s*(?P<end_verse>\d+))?
    )?
    \s*$
    """,
    re.VERBOSE,
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_book(raw_book: str) -> str:
    return raw_book.strip().casefold()


def parse_number(field: str, raw) -> int:
    """Strict base-10 parse of a chapter/verse value, must be >= 1."""
    if _is_blank(raw):
        raise MissingField(field)
    if isinstance(raw, bool):
        raise NotANumber(field, raw)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not INT_RE.match(text):
            raise NotANumber(field, raw)
        value = int(text, 10)
    if value < 1:
        raise OutOfRange(field, value)
    return value


def normalize(raw_book, raw_chapter, raw_verse) -> Reference:
    for field, value in (("book", raw_book), ("chapter", raw_chapter), ("verse", raw_verse)):
        if _is_blank(value):
            raise MissingField(field)

    return Reference(
        book=normalize_book(str(raw_book)),
        chapter=parse_number("chapter", raw_chapter),
        verse=parse_number("verse", raw_verse),
    )


def parse_reference(text: str) -> PassageReference:
    """
    Parse a human reference string.

    Book names keep their original spelling (with whitespace collapsed);
    callers case-fold when they look them up.
    """
    if _is_blank(text):
        raise MissingField("ref")

    match = PASSAGE_RE.match(text)
    if not match:
        raise InvalidReference(text.strip())

    groups = match.groupdict()
    book = " ".join(groups["book"].split())
    chapter = parse_number("chapter", groups["chapter"])
    verse = parse_number("verse", groups["verse"]) if groups["verse"] else None
    end_verse = None
    if groups["end_verse"]:
        end_verse = parse_number("verse", groups["end_verse"])
        if end_verse < verse:
            raise OutOfRange("verse", end_verse, minimum=verse)

    return PassageReference(book=book, chapter=chapter, verse=verse, end_verse=end_verse)
