"""Document data models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class DocumentSummary:
    """Public view of a document, without its content or chunks."""
    id: str
    name: str
    uploaded_at: str


@dataclass
class Document:
    """Represents an uploaded plain-text document."""
    id: str
    name: str  # original filename as uploaded
    filename: str  # backing file under the uploads directory
    content: str
    uploaded_at: str
    chunks: List[str] = field(default_factory=list)

    def summary(self) -> DocumentSummary:
        return DocumentSummary(id=self.id, name=self.name, uploaded_at=self.uploaded_at)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the snapshot format (camelCase keys)."""
        return {
            "id": self.id,
            "name": self.name,
            "filename": self.filename,
            "content": self.content,
            "chunks": list(self.chunks),
            "uploadedAt": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Rebuild a document from a snapshot record."""
        return cls(
            id=data["id"],
            name=data["name"],
            filename=data.get("filename", ""),
            content=data.get("content", ""),
            uploaded_at=data.get("uploadedAt", ""),
            chunks=list(data.get("chunks", [])),
        )
