"""
docsearch - FastAPI application for TF-IDF full-text search

Serves a small search page and a JSON search API over a document collection
(inline text, web pages, PDF files) that is indexed in memory at startup.

Architecture:
- IndexController owns the documents and the TF-IDF index
- Index is built once at startup from a YAML seed file
- Documents can be added later; the index is then STALE until rebuilt
  (or rebuilt automatically with DOCSEARCH_AUTO_REBUILD=true)
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

env_local = Path.cwd() / ".env.local"
env_file = Path.cwd() / ".env"

if env_local.exists():
    load_dotenv(env_local, override=True)
elif env_file.exists():
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from .logging_config import setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", "logs/docsearch.log"),
    console_level=console_level,
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)


from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .controller import IndexController
from .documents import DocumentFactory, load_documents

# Configuration from environment variables
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
SEED_FILE = os.getenv("DOCSEARCH_SEED_FILE", "documents.yaml")
AUTO_REBUILD = os.getenv("DOCSEARCH_AUTO_REBUILD", "false").lower() == "true"

STATIC_DIR = Path(__file__).parent / "static"

APP_START_TIME = datetime.now()

# Global instance (created in lifespan)
controller: Optional[IndexController] = None


def seed_controller(index: IndexController, seed_file: str) -> int:
    """
    Ingest every document listed in the seed file.

    A missing seed file is not an error: the service starts with an empty index.

    Returns:
        Number of documents ingested
    """
    seed_path = Path(seed_file)
    if not seed_path.exists():
        logger.warning(f"Seed file {seed_path} not found - starting with an empty collection")
        return 0

    documents = load_documents(seed_path)
    for document in documents:
        index.ingest(document)
    return len(documents)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the index before serving, drop it on shutdown"""
    global controller

    controller = IndexController(auto_rebuild=AUTO_REBUILD)
    count = seed_controller(controller, SEED_FILE)

    # Reading web pages and PDFs blocks - keep it off the event loop
    logger.info(f"Indexing {count} seed document(s)...")
    await asyncio.to_thread(controller.build)
    logger.info("Search index ready")

    yield

    logger.info("Shutting down...")
    controller = None


app = FastAPI(
    title="docsearch",
    description="In-memory TF-IDF full-text search over text, web pages and PDFs",
    version=__version__,
    lifespan=lifespan,
)


def get_controller() -> IndexController:
    """Dependency: the running IndexController"""
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search index is not initialized",
        )
    return controller


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    index_state: str
    documents: int
    terms: int
    version: str
    started_at: str
    uptime_seconds: float


class DocumentIngestRequest(BaseModel):
    id: int = Field(..., description="Caller-assigned document ID (unique)")
    text: Optional[str] = Field(default=None, description="Inline document text")
    url: Optional[str] = Field(default=None, description="Web page to fetch at index time")
    path: Optional[str] = Field(default=None, description="PDF file path on the server")
    timeout: Optional[float] = Field(default=None, gt=0, description="Fetch timeout for url documents (seconds)")

    class Config:
        json_schema_extra = {
            "example": {
                "id": 5,
                "text": "Python is a dynamically typed programming language.",
            }
        }


class DocumentIngestResponse(BaseModel):
    doc_id: int
    source: str
    index_state: str
    message: str


class IndexStatsResponse(BaseModel):
    state: str
    documents: int
    indexed_documents: int
    terms: int
    built_at: Optional[str] = None


# Routes
@app.get("/", include_in_schema=False)
async def index_page():
    """Static search page"""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health", response_model=HealthResponse)
def health(index: IndexController = Depends(get_controller)):
    """Health check endpoint"""
    stats = index.stats()
    uptime = (datetime.now() - APP_START_TIME).total_seconds()

    return HealthResponse(
        status="healthy",
        index_state=stats["state"],
        documents=stats["documents"],
        terms=stats["terms"],
        version=__version__,
        started_at=APP_START_TIME.isoformat(),
        uptime_seconds=round(uptime, 2),
    )


@app.get("/search", response_model=List[str])
def search(
    query: str = Query(default="", description="Search terms"),
    substring: bool = Query(default=False, description="Also match the raw query as a substring"),
    index: IndexController = Depends(get_controller),
):
    """
    Ranked document texts for a query.

    Empty queries and queries without matches return [].
    """
    results = index.search(query, include_substring=substring)
    logger.info(f"Search {query!r}: {len(results)} result(s)")
    return results


@app.post("/v1/documents", response_model=DocumentIngestResponse, status_code=status.HTTP_201_CREATED)
def ingest_document(
    request: DocumentIngestRequest,
    index: IndexController = Depends(get_controller),
):
    """
    Add a document to the collection.

    The document is not searchable until the index is rebuilt
    (POST /v1/index/build), unless auto-rebuild is enabled.
    """
    try:
        document = DocumentFactory.from_entry(request.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    index.ingest(document)
    state = index.state.value

    return DocumentIngestResponse(
        doc_id=document.doc_id,
        source=document.source,
        index_state=state,
        message="Document indexed" if state == "ready" else "Document added; rebuild the index to search it",
    )


@app.post("/v1/index/build", response_model=IndexStatsResponse)
def build_index(index: IndexController = Depends(get_controller)):
    """Rebuild the whole index from the current collection"""
    index.build()
    return IndexStatsResponse(**index.stats())


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


def run():
    """Console entry point: docsearch-server"""
    import uvicorn

    uvicorn.run("docsearch.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
