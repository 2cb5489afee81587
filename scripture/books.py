# scripture/books.py
"""
Canonical Protestant book list with USFM codes.

Remote services that address books by code (api.bible: "JHN.3.16") need a
name -> code lookup; this table covers full names, the short codes used in
the KJV JSON dumps ("gn", "jo", ...) and a few common abbreviations.
"""

import re
from typing import Optional

# (USFM code, display name, extra aliases)
BOOKS = [
    ("GEN", "Genesis", ("gn", "gen")),
    ("EXO", "Exodus", ("ex", "exod")),
    ("LEV", "Leviticus", ("lv", "lev")),
    ("NUM", "Numbers", ("nm", "num")),
    ("DEU", "Deuteronomy", ("dt", "deut")),
    ("JOS", "Joshua", ("js", "josh")),
    ("JDG", "Judges", ("jud", "judg")),
    ("RUT", "Ruth", ("rt",)),
    ("1SA", "1 Samuel", ("1sm", "1 sam")),
    ("2SA", "2 Samuel", ("2sm", "2 sam")),
    ("1KI", "1 Kings", ("1kgs", "1 kgs")),
    ("2KI", "2 Kings", ("2kgs", "2 kgs")),
    ("1CH", "1 Chronicles", ("1ch", "1 chr")),
    ("2CH", "2 Chronicles", ("2ch", "2 chr")),
    ("EZR", "Ezra", ("ezr",)),
    ("NEH", "Nehemiah", ("ne", "neh")),
    ("EST", "Esther", ("et", "esth")),
    ("JOB", "Job", ()),
    ("PSA", "Psalms", ("ps", "psalm", "psa")),
    ("PRO", "Proverbs", ("prv", "prov")),
    ("ECC", "Ecclesiastes", ("ec", "eccl")),
    ("SNG", "Song of Solomon", ("so", "song", "song of songs")),
    ("ISA", "Isaiah", ("is", "isa")),
    ("JER", "Jeremiah", ("jr", "jer")),
    ("LAM", "Lamentations", ("lm", "lam")),
    ("EZK", "Ezekiel", ("ez", "ezek")),
    ("DAN", "Daniel", ("dn", "dan")),
    ("HOS", "Hosea", ("ho", "hos")),
    ("JOL", "Joel", ("jl",)),
    ("AMO", "Amos", ("am",)),
    ("OBA", "Obadiah", ("ob", "obad")),
    ("JON", "Jonah", ("jn",)),
    ("MIC", "Micah", ("mi", "mic")),
    ("NAM", "Nahum", ("na", "nah")),
    ("HAB", "Habakkuk", ("hk", "hab")),
    ("ZEP", "Zephaniah", ("zp", "zeph")),
    ("HAG", "Haggai", ("hg", "hag")),
    ("ZEC", "Zechariah", ("zc", "zech")),
    ("MAL", "Malachi", ("ml", "mal")),
    ("MAT", "Matthew", ("mt", "matt")),
    ("MRK", "Mark", ("mk",)),
    ("LUK", "Luke", ("lk",)),
    ("JHN", "John", ("jo",)),
    ("ACT", "Acts", ("act",)),
    ("ROM", "Romans", ("rm", "rom")),
    ("1CO", "1 Corinthians", ("1co", "1 cor")),
    ("2CO", "2 Corinthians", ("2co", "2 cor")),
    ("GAL", "Galatians", ("gl", "gal")),
    ("EPH", "Ephesians", ("eph",)),
    ("PHP", "Philippians", ("ph", "phil")),
    ("COL", "Colossians", ("cl", "col")),
    ("1TH", "1 Thessalonians", ("1ts", "1 thess")),
    ("2TH", "2 Thessalonians", ("2ts", "2 thess")),
    ("1TI", "1 Timothy", ("1tm", "1 tim")),
    ("2TI", "2 Timothy", ("2tm", "2 tim")),
    ("TIT", "Titus", ("tt",)),
    ("PHM", "Philemon", ("phm", "philem")),
    ("HEB", "Hebrews", ("hb", "heb")),
    ("JAS", "James", ("jm", "jas")),
    ("1PE", "1 Peter", ("1pe", "1 pet")),
    ("2PE", "2 Peter", ("2pe", "2 pet")),
    ("1JN", "1 John", ("1jo", "1 jn")),
    ("2JN", "2 John", ("2jo", "2 jn")),
    ("3JN", "3 John", ("3jo", "3 jn")),
    ("JUD", "Jude", ("jd",)),
    ("REV", "Revelation", ("re", "rev", "revelations")),
]

USFM_CODES = {code for code, _, _ in BOOKS}

_LOOKUP = {}
for _code, _name, _aliases in BOOKS:
    for _alias in (_name, *_aliases):
        _LOOKUP.setdefault(_alias.casefold(), _code)
        _LOOKUP.setdefault(_alias.casefold().replace(" ", ""), _code)


def usfm_code(book: str) -> Optional[str]:
    """
    'John' / 'jo' / 'JHN' -> 'JHN'; None when the book is unknown.

    Names and KJV codes win over raw USFM codes ("jud" is Judges, not Jude).
    """
    key = re.sub(r"\s+", " ", book.strip()).casefold()
    code = _LOOKUP.get(key) or _LOOKUP.get(key.replace(" ", ""))
    if code is None and key.upper() in USFM_CODES:
        code = key.upper()
    return code
