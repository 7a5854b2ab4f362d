"""Chunking engine for fixed-size character chunks."""
import logging
from typing import List

from models.document import Document
from models.chunk import Chunk
from config import CHUNK_SIZE

logger = logging.getLogger(__name__)


class ChunkingEngine:
    """Segments document text into consecutive, non-overlapping chunks."""

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        """
        Initialize ChunkingEngine.

        Args:
            chunk_size: Chunk length in characters (must be positive)

        Raises:
            ValueError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def chunk_text(self, text: str) -> List[str]:
        """
        Split text into chunks of `chunk_size` characters.

        The last chunk holds the remainder and may be shorter. Joining the
        chunks in order gives back the original text; empty text gives no
        chunks.

        Args:
            text: Text to chunk

        Returns:
            List of chunk strings
        """
        chunks = [
            text[i:i + self.chunk_size]
            for i in range(0, len(text), self.chunk_size)
        ]
        logger.debug(f"Split {len(text)} characters into {len(chunks)} chunks")
        return chunks

    def chunk_document(self, document: Document) -> List[Chunk]:
        """
        Wrap a document's stored chunks as Chunk views.

        Args:
            document: Document whose chunks were computed at upload time

        Returns:
            List of Chunk objects in document order
        """
        return [
            Chunk(
                document_id=document.id,
                document_name=document.name,
                index=idx,
                text=chunk_text
            )
            for idx, chunk_text in enumerate(document.chunks)
        ]
