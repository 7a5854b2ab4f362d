"""Services for DocChat."""
from .exceptions import DocChatError, ValidationError, DocumentNotFoundError, UpstreamError, StorageError
from .document_loader import DocumentLoader
from .chunking_engine import ChunkingEngine
from .document_store import DocumentStore
from .retrieval_engine import RetrievalEngine
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .answer_orchestrator import AnswerOrchestrator, AnswerResult
from .health_checker import HealthChecker, HealthReport

__all__ = ['DocChatError', 'ValidationError', 'DocumentNotFoundError', 'UpstreamError', 'StorageError', 'DocumentLoader', 'ChunkingEngine', 'DocumentStore', 'RetrievalEngine', 'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError', 'AnswerOrchestrator', 'AnswerResult', 'HealthChecker', 'HealthReport']
