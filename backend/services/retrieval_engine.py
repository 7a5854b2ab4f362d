"""Retrieval engine for keyword-matched source citations."""
import logging
from typing import Iterable, List

from models.chunk import ScoredChunk
from models.document import Document
from services.chunking_engine import ChunkingEngine
from config import MAX_SOURCES, KEYWORD_MIN_LENGTH

logger = logging.getLogger(__name__)


class RetrievalEngine:
    """Rank document chunks by naive keyword overlap with a question."""

    def __init__(
        self,
        max_sources: int = MAX_SOURCES,
        min_keyword_length: int = KEYWORD_MIN_LENGTH,
        chunking_engine: ChunkingEngine = None
    ):
        """
        Initialize the retrieval engine.

        Args:
            max_sources: Maximum number of chunks returned
            min_keyword_length: Words must be strictly longer than this to count
            chunking_engine: Used to expose each document's chunks
        """
        self.max_sources = max_sources
        self.min_keyword_length = min_keyword_length
        self.chunking_engine = chunking_engine or ChunkingEngine()
        logger.info("Initialized RetrievalEngine")

    def extract_keywords(self, question: str) -> List[str]:
        """
        Lower-cased words of the question longer than `min_keyword_length`.

        Words are split on single spaces and keep their punctuation, so
        "dog's" and "state-of-the-art" are one keyword each. Repeated words
        are kept, so a word asked twice counts twice.
        """
        return [
            word for word in question.lower().split(" ")
            if len(word) > self.min_keyword_length
        ]

    @staticmethod
    def score(keywords: List[str], text: str) -> int:
        """Number of keywords found as substrings of the lower-cased text."""
        text_lower = text.lower()
        return sum(1 for keyword in keywords if keyword in text_lower)

    def retrieve(self, question: str, documents: Iterable[Document]) -> List[ScoredChunk]:
        """
        Retrieve the best keyword-matching chunks across the given documents.

        Chunks are scored in document and chunk order; chunks without any
        match are dropped, the rest are sorted by relevance (ties keep their
        original order) and truncated to `max_sources`.

        Args:
            question: User question
            documents: Candidate documents

        Returns:
            Up to `max_sources` scored chunks, highest relevance first
        """
        if not question or not question.strip():
            logger.warning("Empty question provided, returning no sources")
            return []

        keywords = self.extract_keywords(question)
        if not keywords:
            logger.info("No keywords in question, returning no sources")
            return []

        scored_chunks = []
        for document in documents:
            for chunk in self.chunking_engine.chunk_document(document):
                relevance = self.score(keywords, chunk.text)
                if relevance > 0:
                    scored_chunks.append(ScoredChunk(chunk=chunk, relevance=relevance))

        # sorted() is stable, so equal scores stay in encounter order
        ranked = sorted(scored_chunks, key=lambda sc: sc.relevance, reverse=True)
        top_chunks = ranked[:self.max_sources]

        logger.info(
            f"Retrieved {len(top_chunks)} of {len(scored_chunks)} matching chunks "
            f"for {len(keywords)} keywords"
        )
        return top_chunks
