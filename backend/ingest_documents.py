"""
Document Ingestion Script for DocChat.

This script:
1. Optionally clears the existing document store
2. Loads all .txt files from a directory
3. Copies each file into the uploads directory and adds it to the store

Usage:
    python ingest_documents.py <directory> [--clear]
"""
import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.document_loader import DocumentLoader
from services.document_store import DocumentStore
from services.exceptions import StorageError

logger = logging.getLogger(__name__)


def ingest_directory(store: DocumentStore, docs_directory: str, clear: bool = False) -> int:
    """
    Add every .txt file in `docs_directory` to the store.

    Args:
        store: DocumentStore to add to
        docs_directory: Directory to read from
        clear: Remove all existing documents first

    Returns:
        Number of documents added
    """
    if clear:
        removed = store.clear()
        logger.info(f"Cleared {removed} existing documents")

    files = DocumentLoader(docs_directory=docs_directory).load_documents()

    added = 0
    for filename, data in files:
        document = store.add_upload(filename, data)
        logger.info(f"  - {document.name} ({len(document.chunks)} chunks)")
        added += 1

    return added


def main(argv: Optional[List[str]] = None) -> int:
    """Main ingestion process."""
    parser = argparse.ArgumentParser(description="Ingest a directory of .txt files into DocChat")
    parser.add_argument("directory", help="Directory containing .txt files")
    parser.add_argument("--clear", action="store_true", help="Remove existing documents first")
    args = parser.parse_args(argv)

    try:
        store = DocumentStore()
        added = ingest_directory(store, args.directory, clear=args.clear)

        if added == 0:
            logger.error(f"No documents found! Check that {args.directory} contains .txt files")
            return 1

        logger.info(f"Ingestion complete: {added} added, {len(store)} documents stored")
        return 0

    except KeyboardInterrupt:
        logger.warning("Ingestion interrupted by user")
        return 1
    except StorageError as e:
        logger.error(f"Ingestion failed: {e.message}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
