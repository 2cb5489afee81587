# scripture/errors.py
"""
Error taxonomy for verse resolution.

Every failure carries a human-readable ``message`` naming the offending
value and, for range errors, the valid bound. ``status_code`` is the HTTP
status the API layer answers with; the core itself never looks at it.
"""


class ScriptureError(Exception):
    """Base class for all resolution failures."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---------- Validation (400) ----------

class ValidationError(ScriptureError):
    """Missing or malformed caller input."""
    status_code = 400


class MissingField(ValidationError):
    VERSE_FIELDS = ("book", "chapter", "verse")

    def __init__(self, field: str):
        self.field = field
        message = f"Missing required parameter '{field}'."
        if field in self.VERSE_FIELDS:
            message += " Please provide book, chapter, and verse."
        super().__init__(message)


class NotANumber(ValidationError):
    def __init__(self, field: str, raw):
        self.field = field
        self.raw = raw
        super().__init__(f"Invalid {field} number: '{raw}' is not a whole number.")


class OutOfRange(ValidationError):
    def __init__(self, field: str, value: int, minimum: int = 1):
        self.field = field
        self.value = value
        self.minimum = minimum
        super().__init__(
            f"Invalid {field} number: {value}. {field.capitalize()} numbers start at {minimum}."
        )


class InvalidReference(ValidationError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Could not parse reference '{raw}'. "
            "Use a form like 'John 3', 'John 3:16' or 'John 3:16-18'."
        )


class InvalidSource(ValidationError):
    def __init__(self, source: str, allowed):
        self.source = source
        super().__init__(
            f"Unsupported source: {source}. Use one of: {', '.join(sorted(allowed))}."
        )


# ---------- Not found ----------

class NotFoundError(ScriptureError):
    """Reference lies outside the corpus."""
    status_code = 404


class BookNotFound(NotFoundError):
    def __init__(self, requested: str):
        self.requested = requested
        super().__init__(
            f"Book '{requested}' not found. Please check the book name or abbreviation."
        )


class ChapterOutOfRange(NotFoundError):
    status_code = 400

    def __init__(self, requested: int, max: int, book: str):
        self.requested = requested
        self.max = max
        self.book = book
        super().__init__(f"Invalid chapter number. {book} has {max} chapters.")


class VerseOutOfRange(NotFoundError):
    status_code = 400

    def __init__(self, requested: int, max: int, chapter: int):
        self.requested = requested
        self.max = max
        self.chapter = chapter
        super().__init__(f"Invalid verse number. Chapter {chapter} has {max} verses.")


# ---------- Operational ----------

class DataIntegrityError(ScriptureError):
    """Corpus file missing or unparseable. Needs an operator, not a retry."""
    status_code = 500


class UpstreamError(ScriptureError):
    """Remote verse service unreachable or returned an unusable response."""
    status_code = 502

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Verse service error: {cause}")
