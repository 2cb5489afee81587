# server.py
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from scripture import config
from scripture.errors import DataIntegrityError, ScriptureError
from scripture.normalizer import parse_reference
from scripture.service import ScriptureService, get_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Starting verse API")
    yield
    logger.info("Shutting down verse API")


app = FastAPI(title="Scripture Verse API", version="1.1.0", lifespan=lifespan)


# ---------- Enable CORS (Browser Security) ----------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ---------- Response shapes ----------
class VerseOut(BaseModel):
    book: str
    chapter: int
    verse: int
    text: str
    reference: str


class ChapterOut(BaseModel):
    book: str
    chapter: int
    verses: List[VerseOut]


class PassageOut(BaseModel):
    reference: str
    verses: List[VerseOut]


class SearchOut(BaseModel):
    query: str
    count: int
    verses: List[VerseOut]


class BookOut(BaseModel):
    abbrev: str
    name: str
    chapters: int


# ---------- Errors -> {"error": "..."} ----------
@app.exception_handler(ScriptureError)
async def scripture_error_handler(request: Request, exc: ScriptureError):
    if isinstance(exc, DataIntegrityError):
        logger.error(f"Bible data problem on {request.url.path}: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse({"error": "Method not allowed. Use GET."}, status_code=405)
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'request'}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse({"error": f"Invalid request parameters. {problems}"}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        {"error": "Internal server error while processing your request."},
        status_code=500,
    )


# ---------- API ----------
@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/verse", response_model=VerseOut)
def get_verse(
    book: Optional[str] = Query(None),
    chapter: Optional[str] = Query(None),
    verse: Optional[str] = Query(None),
    source: str = Query("local"),
    service: ScriptureService = Depends(get_service),
):
    """
    Query:
      - book: abbreviation or full name ('gn', 'Genesis'), any case
      - chapter, verse: whole numbers starting at 1
      - source: 'local' (bundled corpus) or 'remote' (configured provider)
    """
    return service.resolve(book, chapter, verse, source=source).to_dict()


@app.get("/api/verse/daily", response_model=VerseOut)
def get_daily_verse(
    on: Optional[date] = Query(None, alias="date"),
    source: str = Query("remote"),
    service: ScriptureService = Depends(get_service),
):
    return service.daily(on or date.today(), source=source).to_dict()


@app.get("/api/verse/random", response_model=VerseOut)
def get_random_verse(
    source: str = Query("remote"),
    service: ScriptureService = Depends(get_service),
):
    return service.random(source=source).to_dict()


@app.get("/api/chapter", response_model=ChapterOut)
def get_chapter(
    book: Optional[str] = Query(None),
    chapter: Optional[str] = Query(None),
    source: str = Query("local"),
    service: ScriptureService = Depends(get_service),
):
    verses = service.chapter(book, chapter, source=source)
    return {
        "book": verses[0].book,
        "chapter": verses[0].chapter,
        "verses": [v.to_dict() for v in verses],
    }


@app.get("/api/passage", response_model=PassageOut)
def get_passage(
    ref: Optional[str] = Query(None),
    source: str = Query("local"),
    service: ScriptureService = Depends(get_service),
):
    """ref: 'John 3', 'John 3:16' or 'John 3:16-18'."""
    passage = parse_reference(ref)
    verses = service.passage(passage, source=source)
    return {"reference": str(passage), "verses": [v.to_dict() for v in verses]}


@app.get("/api/search", response_model=SearchOut)
def search(
    q: Optional[str] = Query(None),
    source: str = Query("local"),
    service: ScriptureService = Depends(get_service),
):
    verses = service.search(q, source=source)
    return {"query": q.strip(), "count": len(verses), "verses": [v.to_dict() for v in verses]}


@app.get("/api/books", response_model=List[BookOut])
def list_books(service: ScriptureService = Depends(get_service)):
    return service.books()
