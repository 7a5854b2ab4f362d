"""Document loading service for bulk ingestion of text files."""
import logging
import os
from typing import List, Tuple

from config import ALLOWED_EXTENSIONS

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Loads raw text files from a directory."""

    def __init__(self, docs_directory: str):
        """
        Initialize DocumentLoader.

        Args:
            docs_directory: Path to directory containing .txt files
        """
        self.docs_directory = docs_directory

    def load_documents(self) -> List[Tuple[str, bytes]]:
        """
        Load all text files from the documents directory.

        Returns:
            List of (filename, raw bytes) pairs, sorted by filename
        """
        documents = []

        if not os.path.isdir(self.docs_directory):
            logger.error(f"Documents directory not found: {self.docs_directory}")
            return documents

        text_files = [
            f for f in os.listdir(self.docs_directory)
            if f.lower().endswith(ALLOWED_EXTENSIONS)
        ]
        logger.info(f"Found {len(text_files)} text files in {self.docs_directory}")

        for filename in sorted(text_files):
            filepath = os.path.join(self.docs_directory, filename)

            try:
                with open(filepath, "rb") as f:
                    documents.append((filename, f.read()))
                logger.info(f"Loaded {filename}")
            except OSError as e:
                logger.error(f"Error loading {filename}: {str(e)}", exc_info=True)
                # Skip unreadable file and continue
                continue

        logger.info(f"Successfully loaded {len(documents)} documents")
        return documents
