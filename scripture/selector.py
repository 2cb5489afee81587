# scripture/selector.py
"""
Verse-of-the-day and random verse selection.

Both functions only pick a Reference; resolving it (and rejecting a
random pick that falls outside its book) is the caller's job. Nothing
here reads the clock: the caller passes the date in.
"""

import random
from datetime import date
from typing import Optional

from .models import Reference

ROTATION = (
    Reference("John", 3, 16),
    Reference("Romans", 8, 28),
    Reference("Philippians", 4, 13),
    Reference("Jeremiah", 29, 11),
    Reference("Psalms", 23, 1),
    Reference("Isaiah", 40, 31),
    Reference("Matthew", 28, 19),
    Reference("2 Timothy", 3, 16),
)

RANDOM_BOOKS = ("John", "Romans", "Psalms", "Proverbs", "Matthew", "Genesis")
MAX_RANDOM_CHAPTER = 50
MAX_RANDOM_VERSE = 20


def day_of_year(on: date) -> int:
    """1 for January 1st, counted within ``on``'s own year."""
    return on.timetuple().tm_yday


def daily_reference(on: date) -> Reference:
    return ROTATION[day_of_year(on) % len(ROTATION)]


def random_reference(rng: Optional[random.Random] = None) -> Reference:
    """Best-effort pick; chapter/verse are not checked against the book."""
    rng = rng or random
    return Reference(
        book=rng.choice(RANDOM_BOOKS),
        chapter=rng.randint(1, MAX_RANDOM_CHAPTER),
        verse=rng.randint(1, MAX_RANDOM_VERSE),
    )
