"""Answer orchestration: prompt the LLM with documents and attach sources."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from models.chunk import ScoredChunk
from models.document import Document
from services.document_store import DocumentStore
from services.exceptions import UpstreamError, ValidationError
from services.llm_client import LLMClient, LLMClientError
from services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)


@dataclass
class AnswerResult:
    """LLM answer with the keyword-matched sources for the same documents."""
    question: str
    answer: str
    sources: List[ScoredChunk] = field(default_factory=list)


class AnswerOrchestrator:
    """Answers questions over stored documents with an LLM."""

    def __init__(
        self,
        document_store: DocumentStore,
        retrieval_engine: RetrievalEngine,
        llm_client: Optional[LLMClient]
    ):
        """
        Initialize the orchestrator.

        Args:
            document_store: Source of documents
            retrieval_engine: Produces source citations
            llm_client: Text completion client; None when no API key is configured
        """
        self.document_store = document_store
        self.retrieval_engine = retrieval_engine
        self.llm_client = llm_client

    def resolve_documents(self, document_ids: Optional[List[str]] = None) -> List[Document]:
        """
        Select the documents a question is asked against.

        Args:
            document_ids: Ids to restrict to; None or empty means all documents

        Returns:
            Target documents in store order

        Raises:
            ValidationError: If the store is empty or no id matches
        """
        if len(self.document_store) == 0:
            raise ValidationError("No documents uploaded yet")

        if not document_ids:
            return self.document_store.get_all()

        documents = self.document_store.get_many(document_ids)
        if not documents:
            raise ValidationError("None of the selected documents were found")
        return documents

    def answer(self, question: Optional[str], document_ids: Optional[List[str]] = None) -> AnswerResult:
        """
        Answer a question from the selected documents.

        The LLM sees the full text of every target document; the sources are
        computed separately by keyword matching over the same documents and
        are not derived from what the model cited.

        Args:
            question: User question
            document_ids: Optional subset of document ids

        Returns:
            AnswerResult with the LLM text unmodified and up to three sources

        Raises:
            ValidationError: Blank question, empty store, or unknown selection
            UpstreamError: If the LLM call fails
        """
        if not question or not question.strip():
            raise ValidationError("Question is required")

        documents = self.resolve_documents(document_ids)
        logger.info(f"Answering question over {len(documents)} documents: {question[:100]}")

        prompt = LLMClient.build_prompt(question, documents)

        if self.llm_client is None:
            logger.error("No LLM client configured (is GROQ_API_KEY set?)")
            raise UpstreamError("Failed to process question")

        try:
            llm_response = self.llm_client.generate(prompt)
        except LLMClientError as e:
            logger.error(f"LLM client error: {e.error.code} {e.error.message}")
            raise UpstreamError("Failed to process question") from e
        except Exception as e:
            logger.error(f"Unexpected LLM failure: {e}", exc_info=True)
            raise UpstreamError("Failed to process question") from e

        sources = self.retrieval_engine.retrieve(question, documents)

        return AnswerResult(
            question=question,
            answer=llm_response.text,
            sources=sources
        )
