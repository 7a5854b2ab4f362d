"""LLM Client for Groq API integration."""
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Dict, Any
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from models.document import Document
from config import GROQ_API_KEY, LLM_MODEL, LLM_MAX_TOKENS

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM generation."""
    text: str
    tokens_input: int
    tokens_output: int
    latency_ms: int
    model_used: str


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(Exception):
    """Custom exception for LLM client errors with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMClient:
    """Client for interfacing with Groq API for text generation."""

    def __init__(self, api_key: Optional[str] = None, model: str = LLM_MODEL):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            model: Default model name used by generate()
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.model = model
        # Failures surface to the caller immediately
        self.client = Groq(api_key=self.api_key, max_retries=0)
        logger.info(f"LLMClient initialized successfully (model={self.model})")

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = LLM_MAX_TOKENS
    ) -> LLMResponse:
        """
        Generate response using Groq API.

        Args:
            prompt: Complete prompt with documents and question
            model: Model name (defaults to the client's model)
            max_tokens: Maximum tokens to generate

        Returns:
            LLMResponse with text, token counts, and latency

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        model = model or self.model
        start_time = time.time()

        try:
            logger.debug(f"Generating response with model: {model}")

            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": prompt
                    }
                ],
                max_tokens=max_tokens,
                temperature=0.2
            )

            latency_ms = int((time.time() - start_time) * 1000)

            text = response.choices[0].message.content or ""
            tokens_input = response.usage.prompt_tokens
            tokens_output = response.usage.completion_tokens

            logger.info(
                f"Generated response: model={model}, "
                f"input_tokens={tokens_input}, output_tokens={tokens_output}, "
                f"latency={latency_ms}ms"
            )

            return LLMResponse(
                text=text,
                tokens_input=tokens_input,
                tokens_output=tokens_output,
                latency_ms=latency_ms,
                model_used=model
            )

        except RateLimitError as e:
            raise self._error(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                model, start_time, e
            )

        except AuthenticationError as e:
            raise self._error(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                model, start_time, e
            )

        except APITimeoutError as e:
            raise self._error(
                "TIMEOUT_ERROR",
                "Request timed out.",
                model, start_time, e
            )

        except APIError as e:
            raise self._error(
                "API_ERROR",
                f"Groq API error: {str(e)}",
                model, start_time, e
            )

        except Exception as e:
            raise self._error(
                "UNKNOWN_ERROR",
                f"Unexpected error during generation: {str(e)}",
                model, start_time, e
            )

    @staticmethod
    def _error(code: str, message: str, model: str, start_time: float, exc: Exception) -> LLMClientError:
        """Log a provider failure and wrap it as an LLMClientError."""
        latency_ms = int((time.time() - start_time) * 1000)
        error = LLMError(
            code=code,
            message=message,
            details={
                "model": model,
                "latency_ms": latency_ms,
                "original_error": str(exc),
                "error_type": type(exc).__name__
            }
        )
        logger.error(
            f"{code}: model={model}, latency={latency_ms}ms, error={exc}",
            exc_info=True,
            extra={"error_code": error.code, "error_details": error.details}
        )
        return LLMClientError(error)

    def check_connection(self) -> bool:
        """
        Make a lightweight metadata call (list models) to verify the provider.

        Returns:
            True if the provider answered, False otherwise
        """
        try:
            self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"LLM connection check failed: {e}")
            return False

    @staticmethod
    def build_prompt(question: str, documents: Iterable[Document]) -> str:
        """
        Build prompt with the full text of every document and the question.

        Args:
            question: User question
            documents: Documents to include, each under a header with its name

        Returns:
            Complete prompt string
        """
        documents_text = "\n---\n\n".join(
            f"[Document: {doc.name}]\n{doc.content}\n"
            for doc in documents
        )

        prompt = f"""You are a helpful assistant that answers questions based on the provided documents. Always cite which document you're referring to. If the answer isn't in the documents, say so.

Documents:
{documents_text}

Question: {question}

Please answer the question based on the documents above. Cite the document name and quote the relevant part."""

        return prompt
