"""Data models for DocChat."""
from .document import Document, DocumentSummary
from .chunk import Chunk, ScoredChunk
from .api import (
    AskRequest,
    AskResponse,
    DocumentInfo,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    Source,
    UploadResponse,
)

__all__ = [
    "Document",
    "DocumentSummary",
    "Chunk",
    "ScoredChunk",
    "AskRequest",
    "AskResponse",
    "DocumentInfo",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "Source",
    "UploadResponse",
]
