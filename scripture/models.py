# scripture/models.py
from dataclasses import asdict, dataclass
from typing import Optional, Tuple


def format_reference(book: str, chapter: int, verse: int) -> str:
    """'John', 3, 16 -> 'John 3:16'. Shared by local and remote results."""
    return f"{book} {chapter}:{verse}"


@dataclass(frozen=True)
class Book:
    """
    One book of the corpus.

    Attributes:
        abbreviation: Short code, e.g. "gn" (case-insensitive identity)
        name: Full name, e.g. "Genesis" (optional in the data file)
        chapters: Chapters in order, each a tuple of verse texts
    """
    abbreviation: str
    name: Optional[str]
    chapters: Tuple[Tuple[str, ...], ...]

    @property
    def display_name(self) -> str:
        return self.name or self.abbreviation.upper()

    @property
    def aliases(self) -> Tuple[str, ...]:
        """Case-folded lookup keys, abbreviation first."""
        keys = [self.abbreviation.strip().casefold()]
        if self.name:
            keys.append(self.name.strip().casefold())
        return tuple(keys)


@dataclass(frozen=True)
class Reference:
    book: str
    chapter: int
    verse: int

    def __str__(self) -> str:
        return format_reference(self.book, self.chapter, self.verse)


@dataclass(frozen=True)
class PassageReference:
    """
    A chapter, single verse or verse range, as parsed from "John 3:16-18".

    ``verse`` is None for a whole chapter; ``end_verse`` is None unless a
    range was given.
    """
    book: str
    chapter: int
    verse: Optional[int] = None
    end_verse: Optional[int] = None

    @property
    def is_chapter(self) -> bool:
        return self.verse is None

    def __str__(self) -> str:
        if self.is_chapter:
            return f"{self.book} {self.chapter}"
        if self.end_verse and self.end_verse != self.verse:
            return f"{self.book} {self.chapter}:{self.verse}-{self.end_verse}"
        return format_reference(self.book, self.chapter, self.verse)


@dataclass(frozen=True)
class ResolvedVerse:
    book: str
    chapter: int
    verse: int
    text: str
    reference: str

    @classmethod
    def build(cls, book: str, chapter: int, verse: int, text: str) -> "ResolvedVerse":
        return cls(
            book=book,
            chapter=chapter,
            verse=verse,
            text=text,
            reference=format_reference(book, chapter, verse),
        )

    def to_dict(self) -> dict:
        return asdict(self)
