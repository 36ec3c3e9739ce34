"""
FastAPI application for the Bookshelf API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config, APIConfig
from api.models import HealthResponse
from books.handlers import BookHandlers
from books.models import BookPayload, HandlerResult, utc_timestamp
from books.store import BookStore
from utilities.config import config
from utilities.logger import setup_logging, get_logger

# Setup logging
setup_logging(
    log_level=config.log_level,
    log_format=config.log_format,
    log_file=config.get_log_file_path(),
    debug=config.debug
)
logger = get_logger(__name__)

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Bookshelf API", version=app.version)

    yield

    logger.info("Shutting down Bookshelf API", books_count=len(app.state.store))


def get_handlers(request: Request) -> BookHandlers:
    """Handlers bound to the store of the application serving the request."""
    return request.app.state.handlers


def render(result: HandlerResult) -> JSONResponse:
    """Serialize a handler result with the status code it carries."""
    return JSONResponse(status_code=result.status_code, content=result.envelope())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render undecodable request bodies and parameters as a 400 fail envelope."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"]
        }
        for error in exc.errors()
    ]
    logger.warning("Invalid request payload", path=request.url.path, errors=errors)
    return render(HandlerResult.fail(
        "invalid request payload",
        status.HTTP_400_BAD_REQUEST,
        data={"errors": errors}
    ))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions raised by routing (unknown path, wrong method)."""
    response = render(HandlerResult.fail(str(exc.detail), exc.status_code))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    data = {"detail": str(exc)} if request.app.state.api_config.debug else None
    return render(HandlerResult.fail(
        "internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        data=data
    ))


def create_app(store: Optional[BookStore] = None, settings: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the FastAPI application around a book store.

    Args:
        store: Store to serve; a new empty one is created when omitted
        settings: API settings; the global configuration when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or api_config

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    app.state.api_config = settings
    app.state.store = store if store is not None else BookStore()
    app.state.handlers = BookHandlers(app.state.store, id_length=config.book_id_length)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)
    return app


# Health check endpoint
@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        version=request.app.version,
        books_count=len(request.app.state.store)
    )


# Books endpoints
@router.post("/books", status_code=status.HTTP_201_CREATED, tags=["Books"])
async def add_book(payload: BookPayload, handlers: BookHandlers = Depends(get_handlers)):
    """
    Add a book.

    - **name**: required
    - **readPage**: must not exceed **pageCount**
    """
    return render(handlers.create_book(payload))


@router.get("/books", tags=["Books"])
async def get_books(
    name: Optional[str] = None,
    reading: Optional[str] = None,
    finished: Optional[str] = None,
    handlers: BookHandlers = Depends(get_handlers)
):
    """
    List books projected to id, name and publisher.

    Only the first supplied filter applies:

    - **name**: case-insensitive substring of the book name
    - **reading**: 0 or 1
    - **finished**: 0 or 1
    """
    return render(handlers.list_books(name=name, reading=reading, finished=finished))


@router.get("/books/{book_id}", tags=["Books"])
async def get_book(book_id: str, handlers: BookHandlers = Depends(get_handlers)):
    """Get a single book by ID."""
    return render(handlers.get_book(book_id))


@router.put("/books/{book_id}", tags=["Books"])
async def update_book(book_id: str, payload: BookPayload, handlers: BookHandlers = Depends(get_handlers)):
    """Replace a book's fields; ``id`` and ``insertedAt`` are kept."""
    return render(handlers.update_book(book_id, payload))


@router.delete("/books/{book_id}", tags=["Books"])
async def delete_book(book_id: str, handlers: BookHandlers = Depends(get_handlers)):
    """Delete a book by ID."""
    return render(handlers.delete_book(book_id))


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level=api_config.log_level.lower()
    )
