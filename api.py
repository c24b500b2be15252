import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, ValidationError, field_validator

from book import Book
from config import settings
from library import BookNotFoundError, Library, StorageError
from validators import BookIdValidator, TextValidator

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a DatabaseInitError here propagates and aborts the server.
    app.state.library = Library(db_file=app.state.db_file, seed=app.state.seed)
    logger.info("Starting %s with database %s", settings.app_name, app.state.db_file)
    yield


# --- Models ---
class BookModel(BaseModel):
    id: str
    name: str
    author: str


class BookPayloadModel(BaseModel):
    # Unknown keys, including an "id", are ignored
    name: str
    author: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not TextValidator.validate_name(value):
            raise ValueError("name must not be empty")
        return value

    @field_validator("author")
    @classmethod
    def _check_author(cls, value: str) -> str:
        if not TextValidator.validate_author(value):
            raise ValueError("author must not be empty")
        return value


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """The storage handle built by the lifespan hook."""
    return request.app.state.library


def path_book_id(book_id: str) -> int:
    """The {book_id} path segment as an integer, 400 when it is not one."""
    try:
        return BookIdValidator.parse_id(book_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid ID")


async def read_payload(request: Request) -> BookPayloadModel:
    """Decode the body as a book whatever its Content-Type, 400 when it is not one."""
    raw = await request.body()
    try:
        return BookPayloadModel.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Rejected payload on %s: %s", request.url.path, e.errors())
        raise HTTPException(status_code=400, detail="Invalid request payload")


def _to_model(book: Book) -> BookModel:
    return BookModel(**book.to_dict())


# --- API Endpoints ---
router = APIRouter(prefix="/api")


@router.get("/getbooks", response_model=List[BookModel])
def get_books(library: Library = Depends(get_library)):
    """List every stored book."""
    try:
        books = library.fetch_books()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [_to_model(b) for b in books]


@router.get("/getbooks/{book_id}", response_model=BookModel)
def get_book(book_id: int = Depends(path_book_id), library: Library = Depends(get_library)):
    """Get a single book by its id."""
    try:
        book = library.fetch_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _to_model(book)


@router.post("/createbooks", response_model=BookModel)
def create_book(payload: BookPayloadModel = Depends(read_payload), library: Library = Depends(get_library)):
    """Store a new book and echo it back with the id storage assigned."""
    try:
        book = library.insert_book(Book(name=payload.name, author=payload.author))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Created book %s", book.id)
    return _to_model(book)


# The id dependency is declared before the payload one so a bad id wins.
@router.put("/updatebooks/{book_id}", response_model=BookModel)
def update_book(
    book_id: int = Depends(path_book_id),
    payload: BookPayloadModel = Depends(read_payload),
    library: Library = Depends(get_library),
):
    """Overwrite name and author; the id always comes from the path."""
    try:
        book = library.update_book(Book(id=book_id, name=payload.name, author=payload.author))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _to_model(book)


@router.delete("/deletebooks/{book_id}", response_model=List[BookModel])
def delete_book(book_id: int = Depends(path_book_id), library: Library = Depends(get_library)):
    """Delete a book and return the books that remain."""
    try:
        library.delete_book(book_id)
        books = library.fetch_books()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [_to_model(b) for b in books]


def create_app(db_file: Optional[str] = None, seed: Optional[bool] = None) -> FastAPI:
    """Build the application. The database is only touched when it starts."""
    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug, lifespan=lifespan)
    app.state.db_file = db_file or settings.db_file
    app.state.seed = settings.seed_books if seed is None else seed
    app.include_router(router)
    return app


app = create_app()
