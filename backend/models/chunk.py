"""Chunk data models."""
from dataclasses import dataclass


@dataclass
class Chunk:
    """A fixed-size slice of a document's text, used for relevance scoring."""
    document_id: str
    document_name: str
    index: int  # position within the parent document
    text: str


@dataclass
class ScoredChunk:
    """Chunk with keyword relevance from retrieval."""
    chunk: Chunk
    relevance: int  # number of keyword matches
