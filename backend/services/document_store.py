"""Document store with a JSON snapshot on disk."""
import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from models.document import Document, DocumentSummary
from services.chunking_engine import ChunkingEngine
from services.exceptions import DocumentNotFoundError, StorageError
from config import DOCUMENTS_FILE, UPLOADS_DIR

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    """Current UTC time, e.g. 2024-05-01T12:00:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentStore:
    """
    Holds uploaded documents in memory and persists them as one JSON snapshot.

    The whole collection is rewritten after every mutation. Mutations and
    snapshot writes are serialized by a lock so concurrent requests cannot
    interleave partial writes.
    """

    def __init__(
        self,
        documents_file: Path = DOCUMENTS_FILE,
        uploads_dir: Path = UPLOADS_DIR,
        chunking_engine: Optional[ChunkingEngine] = None
    ):
        """
        Initialize the store and load an existing snapshot if present.

        Args:
            documents_file: Path of the JSON snapshot
            uploads_dir: Directory holding one raw file per document
            chunking_engine: Chunker applied to new documents
        """
        self.documents_file = Path(documents_file)
        self.uploads_dir = Path(uploads_dir)
        self.chunking_engine = chunking_engine or ChunkingEngine()
        self._lock = threading.RLock()
        self._documents: List[Document] = []

        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.documents_file.parent.mkdir(parents=True, exist_ok=True)
        self._load()

        logger.info(
            f"Initialized DocumentStore with {len(self._documents)} documents "
            f"(snapshot: {self.documents_file})"
        )

    def __len__(self) -> int:
        return len(self._documents)

    def _load(self) -> None:
        """Read the snapshot; a missing or unreadable file leaves the store empty."""
        if not self.documents_file.exists():
            return

        try:
            with open(self.documents_file, "r", encoding="utf-8") as f:
                records = json.load(f)
            self._documents = [Document.from_dict(record) for record in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Could not load documents from {self.documents_file}: {e}")
            self._documents = []

    def _save(self) -> None:
        """
        Write the full collection to the snapshot file atomically.

        Raises:
            StorageError: If the snapshot cannot be written
        """
        tmp_path = self.documents_file.with_suffix(".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([doc.to_dict() for doc in self._documents], f, indent=2)
            os.replace(tmp_path, self.documents_file)
        except OSError as e:
            logger.error(f"Failed to save documents to {self.documents_file}: {e}")
            raise StorageError("Failed to save documents") from e

        logger.debug(f"Saved {len(self._documents)} documents to {self.documents_file}")

    def save_upload(self, original_name: str, data: bytes) -> str:
        """
        Store raw uploaded bytes under a unique name in the uploads directory.

        Args:
            original_name: Filename as provided by the client
            data: File contents

        Returns:
            Backing filename, "<uuid>-<original name>"

        Raises:
            StorageError: If the file cannot be written
        """
        filename = f"{uuid.uuid4()}-{os.path.basename(original_name)}"
        try:
            (self.uploads_dir / filename).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write upload {filename}: {e}")
            raise StorageError("Failed to upload document") from e
        return filename

    def add(self, name: str, filename: str, content: str) -> Document:
        """
        Add a new document and persist the collection.

        The in-memory append is not rolled back if the snapshot write fails.

        Args:
            name: Original document name
            filename: Backing file under the uploads directory
            content: Full document text

        Returns:
            The stored Document

        Raises:
            StorageError: If the snapshot cannot be written
        """
        document = Document(
            id=str(uuid.uuid4()),
            name=name,
            filename=filename,
            content=content,
            chunks=self.chunking_engine.chunk_text(content),
            uploaded_at=_now_iso()
        )

        with self._lock:
            self._documents.append(document)
            self._save()

        logger.info(f"Added document {document.name} ({document.id}, {len(document.chunks)} chunks)")
        return document

    def add_upload(self, original_name: str, data: bytes) -> Document:
        """Save raw upload bytes and add the decoded text as a document."""
        filename = self.save_upload(original_name, data)
        content = data.decode("utf-8", errors="replace")
        return self.add(os.path.basename(original_name), filename, content)

    def list(self) -> List[DocumentSummary]:
        """Return id, name and upload time of every document."""
        return [doc.summary() for doc in self._documents]

    def get(self, document_id: str) -> Optional[Document]:
        return next((doc for doc in self._documents if doc.id == document_id), None)

    def get_all(self) -> List[Document]:
        return list(self._documents)

    def get_many(self, document_ids: Iterable[str]) -> List[Document]:
        """Documents whose id is in `document_ids`, in store order."""
        wanted = set(document_ids)
        return [doc for doc in self._documents if doc.id in wanted]

    def remove(self, document_id: str) -> None:
        """
        Delete a document, its backing file, and persist the collection.

        Args:
            document_id: Id of the document to delete

        Raises:
            DocumentNotFoundError: If no document has that id
            StorageError: If the snapshot cannot be written
        """
        with self._lock:
            document = self.get(document_id)
            if document is None:
                raise DocumentNotFoundError("Document not found")

            if document.filename:
                file_path = self.uploads_dir / document.filename
                try:
                    file_path.unlink()
                except FileNotFoundError:
                    logger.debug(f"Backing file already gone: {file_path}")
                except OSError as e:
                    logger.error(f"Failed to delete {file_path}: {e}")
                    raise StorageError("Failed to delete document") from e

            self._documents.remove(document)
            self._save()

        logger.info(f"Removed document {document.name} ({document_id})")

    def clear(self) -> int:
        """Remove every document; returns how many were removed."""
        with self._lock:
            removed = 0
            for document in self.get_all():
                self.remove(document.id)
                removed += 1
        return removed

    def check_storage(self) -> bool:
        """True if the snapshot is absent or both readable and writable."""
        if not self.documents_file.exists():
            return True
        return os.access(self.documents_file, os.R_OK | os.W_OK)
