# scripture/config.py
import os

# ---------- Local corpus ----------
CORPUS_PATH = os.getenv("SCRIPTURE_CORPUS_PATH", os.path.join("data", "kjv.json"))
SEARCH_LIMIT = int(os.getenv("SEARCH_LIMIT", "20"))

# ---------- Remote providers ----------
REMOTE_PROVIDER = os.getenv("SCRIPTURE_REMOTE_PROVIDER", "bibleapi")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "12"))

BIBLE_API_BASE = os.getenv("BIBLE_API_BASE", "https://bible-api.com")

API_BIBLE_KEY = os.getenv("API_BIBLE_KEY")
API_BIBLE_BASE = os.getenv("API_BIBLE_BASE", "https://api.scripture.api.bible/v1")
API_BIBLE_ID = os.getenv("API_BIBLE_ID", "de4e12af7f28f599-02")  # King James Version

# ---------- Server ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_DEFAULT_ORIGINS = (
    "http://localhost:5500,http://127.0.0.1:5500,"
    "http://localhost:5173,http://127.0.0.1:5173,"
    "http://localhost:3000,http://127.0.0.1:3000"
)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]
