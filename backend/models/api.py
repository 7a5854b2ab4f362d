"""Request and response schemas for the HTTP API."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True)


class DocumentInfo(APIModel):
    id: str
    name: str
    uploaded_at: str = Field(alias="uploadedAt")


class UploadResponse(APIModel):
    message: str
    document: DocumentInfo


class MessageResponse(APIModel):
    message: str


class AskRequest(APIModel):
    """Question about the uploaded documents, optionally scoped to some of them."""
    question: Optional[str] = None
    document_ids: Optional[List[str]] = Field(default=None, alias="documentIds")


class Source(APIModel):
    """A chunk surfaced as probable evidence for an answer."""
    document_name: str = Field(alias="documentName")
    document_id: str = Field(alias="documentId")
    text: str
    relevance: int


class AskResponse(APIModel):
    question: str
    answer: str
    sources: List[Source]


class HealthResponse(APIModel):
    backend: str
    database: str
    llm: str
    timestamp: str


class ErrorResponse(APIModel):
    error: str
