"""Main entry point for the DocChat API."""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import PORT, CORS_ORIGINS, ALLOWED_EXTENSIONS
from models.api import (
    AskRequest,
    AskResponse,
    DocumentInfo,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    Source,
    UploadResponse,
)
from services.answer_orchestrator import AnswerOrchestrator
from services.document_store import DocumentStore
from services.exceptions import DocChatError, ValidationError
from services.health_checker import HealthChecker
from services.llm_client import LLMClient
from services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# Initialize FastAPI app
app = FastAPI(
    title="DocChat",
    description="Ask questions about uploaded text documents, answered by an LLM with cited sources",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

router = APIRouter(prefix="/api")

# Initialize services (will be done on startup)
document_store: DocumentStore = None
retrieval_engine: RetrievalEngine = None
llm_client: Optional[LLMClient] = None
answer_orchestrator: AnswerOrchestrator = None
health_checker: HealthChecker = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global document_store, retrieval_engine, llm_client, answer_orchestrator, health_checker

    logger.info("Initializing DocChat services...")

    try:
        document_store = DocumentStore()
        logger.info(f"Initialized DocumentStore ({len(document_store)} documents stored)")

        retrieval_engine = RetrievalEngine()

        try:
            llm_client = LLMClient()
        except ValueError as e:
            # The API still serves documents; /ask and /health report the problem
            llm_client = None
            logger.warning(f"LLM client unavailable: {e}")

        answer_orchestrator = AnswerOrchestrator(document_store, retrieval_engine, llm_client)
        health_checker = HealthChecker(document_store, llm_client)

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise


# Error handlers: every failure reaches the client as {"error": "..."}
def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(DocChatError)
async def docchat_error_handler(request: Request, exc: DocChatError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(f"{request.method} {request.url.path} invalid request: {errors}")
    return error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(500, "Internal server error")


@app.get("/", include_in_schema=False)
async def index():
    """Serve the single-page client."""
    return FileResponse(STATIC_DIR / "index.html")


@router.get("")
async def root():
    """Service status."""
    return {"status": "ok", "service": "docchat", "version": app.version}


@router.get("/health", response_model=HealthResponse)
async def health():
    """
    Report backend, storage and LLM status.

    Returns 200 when every check is healthy, 503 otherwise.
    """
    report = await asyncio.to_thread(health_checker.check)
    body = HealthResponse(
        backend=report.backend,
        database=report.database,
        llm=report.llm,
        timestamp=report.timestamp
    )
    return JSONResponse(
        status_code=200 if report.is_healthy else 503,
        content=body.model_dump()
    )


@router.post("/documents/upload", response_model=UploadResponse)
async def upload_document(file: Optional[UploadFile] = File(None)) -> UploadResponse:
    """Upload a single .txt document (multipart field `file`)."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    if not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise ValidationError("Only .txt files are allowed!")

    data = await file.read()
    document = await asyncio.to_thread(document_store.add_upload, file.filename, data)

    return UploadResponse(
        message="Document uploaded successfully",
        document=DocumentInfo(
            id=document.id,
            name=document.name,
            uploaded_at=document.uploaded_at
        )
    )


@router.get("/documents", response_model=List[DocumentInfo])
async def list_documents() -> List[DocumentInfo]:
    """List stored documents without their content."""
    return [
        DocumentInfo(id=summary.id, name=summary.name, uploaded_at=summary.uploaded_at)
        for summary in document_store.list()
    ]


@router.delete("/documents/{document_id}", response_model=MessageResponse)
async def delete_document(document_id: str) -> MessageResponse:
    """Delete a document and its uploaded file."""
    await asyncio.to_thread(document_store.remove, document_id)
    return MessageResponse(message="Document deleted successfully")


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest) -> AskResponse:
    """
    Answer a question from the uploaded documents.

    Args:
        request: AskRequest with question and optional documentIds

    Returns:
        AskResponse with the LLM answer and up to three keyword-matched sources

    Raises:
        ValidationError: Blank question, no documents, or unknown selection (400)
        UpstreamError: LLM failure (500)
    """
    result = await asyncio.to_thread(
        answer_orchestrator.answer,
        request.question,
        request.document_ids
    )

    return AskResponse(
        question=result.question,
        answer=result.answer,
        sources=[
            Source(
                document_name=scored.chunk.document_name,
                document_id=scored.chunk.document_id,
                text=scored.chunk.text,
                relevance=scored.relevance
            )
            for scored in result.sources
        ]
    )


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting DocChat API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
