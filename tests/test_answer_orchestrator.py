"""Unit tests for AnswerOrchestrator."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock
from services.answer_orchestrator import AnswerOrchestrator
from services.document_store import DocumentStore
from services.exceptions import UpstreamError, ValidationError
from services.llm_client import LLMClient, LLMError, LLMClientError, LLMResponse
from services.retrieval_engine import RetrievalEngine


def llm_response(text):
    return LLMResponse(
        text=text,
        tokens_input=100,
        tokens_output=20,
        latency_ms=5,
        model_used="llama-3.1-8b-instant"
    )


class TestAnswerOrchestrator:
    """Test suite for AnswerOrchestrator."""

    @pytest.fixture
    def store(self, tmp_path):
        return DocumentStore(
            documents_file=tmp_path / "documents.json",
            uploads_dir=tmp_path / "uploads"
        )

    @pytest.fixture
    def mock_llm(self):
        llm = Mock(spec=LLMClient)
        llm.generate.return_value = llm_response("Mocked answer.")
        return llm

    @pytest.fixture
    def orchestrator(self, store, mock_llm):
        return AnswerOrchestrator(store, RetrievalEngine(), mock_llm)

    def test_blank_question_rejected_before_store_and_llm(self, mock_llm):
        store = Mock()
        orchestrator = AnswerOrchestrator(store, RetrievalEngine(), mock_llm)

        for question in (None, "", "   "):
            with pytest.raises(ValidationError, match="Question is required"):
                orchestrator.answer(question)

        assert store.mock_calls == []
        mock_llm.generate.assert_not_called()

    def test_empty_store_rejected(self, orchestrator, mock_llm):
        with pytest.raises(ValidationError, match="No documents uploaded yet"):
            orchestrator.answer("What is this about?")
        mock_llm.generate.assert_not_called()

    def test_unknown_ids_rejected(self, orchestrator, store, mock_llm):
        store.add_upload("pets.txt", b"The cat sat on the mat.")

        with pytest.raises(ValidationError, match="None of the selected documents were found"):
            orchestrator.answer("What did the cat do?", ["missing-1", "missing-2"])
        mock_llm.generate.assert_not_called()

    def test_resolve_documents_all_when_no_ids(self, orchestrator, store):
        first = store.add_upload("a.txt", b"a")
        second = store.add_upload("b.txt", b"b")

        assert orchestrator.resolve_documents(None) == [first, second]
        assert orchestrator.resolve_documents([]) == [first, second]

    def test_resolve_documents_subset(self, orchestrator, store):
        store.add_upload("a.txt", b"a")
        second = store.add_upload("b.txt", b"b")

        assert orchestrator.resolve_documents([second.id, "unknown"]) == [second]

    def test_answer_passes_llm_text_through(self, orchestrator, store, mock_llm):
        mock_llm.generate.return_value = llm_response("  Verbatim *answer* [pets.txt]\n")
        store.add_upload("pets.txt", b"The cat sat on the mat. The dog ran fast.")

        result = orchestrator.answer("What did the cat do?")

        assert result.question == "What did the cat do?"
        assert result.answer == "  Verbatim *answer* [pets.txt]\n"

    def test_prompt_contains_only_selected_documents(self, orchestrator, store, mock_llm):
        store.add_upload("pets.txt", b"The cat sat on the mat.")
        cars = store.add_upload("cars.txt", b"The red car is fast.")

        orchestrator.answer("Which car is fast?", [cars.id])

        prompt = mock_llm.generate.call_args.args[0]
        assert "[Document: cars.txt]" in prompt
        assert "pets.txt" not in prompt
        assert "Question: Which car is fast?" in prompt

    def test_sources_come_from_target_documents(self, orchestrator, store):
        pets = store.add_upload("pets.txt", b"The cat sat on the mat. The dog ran fast.")
        store.add_upload("cars.txt", b"A fast car.")

        result = orchestrator.answer("How fast did the dog run?", [pets.id])

        assert len(result.sources) == 1
        assert result.sources[0].chunk.document_name == "pets.txt"
        assert result.sources[0].chunk.document_id == pets.id
        assert "cat" in result.sources[0].chunk.text
        assert result.sources[0].relevance >= 1

    def test_sources_capped_at_three(self, orchestrator, store):
        for i in range(5):
            store.add_upload(f"doc{i}.txt", b"shared keyword here")

        result = orchestrator.answer("Where is the keyword")

        assert len(result.sources) == 3

    def test_llm_client_error_becomes_upstream_error(self, orchestrator, store, mock_llm):
        store.add_upload("pets.txt", b"The cat sat.")
        mock_llm.generate.side_effect = LLMClientError(
            LLMError(code="API_ERROR", message="Groq API error: down", details={})
        )

        with pytest.raises(UpstreamError, match="Failed to process question"):
            orchestrator.answer("What did the cat do?")

        assert mock_llm.generate.call_count == 1

    def test_unexpected_llm_failure_becomes_upstream_error(self, orchestrator, store, mock_llm):
        store.add_upload("pets.txt", b"The cat sat.")
        mock_llm.generate.side_effect = RuntimeError("socket closed")

        with pytest.raises(UpstreamError):
            orchestrator.answer("What did the cat do?")

    def test_missing_llm_client(self, store):
        store.add_upload("pets.txt", b"The cat sat.")
        orchestrator = AnswerOrchestrator(store, RetrievalEngine(), None)

        with pytest.raises(UpstreamError, match="Failed to process question"):
            orchestrator.answer("What did the cat do?")
