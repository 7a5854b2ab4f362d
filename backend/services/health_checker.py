"""Health checks for the backend, document storage and LLM provider."""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from services.document_store import DocumentStore
from services.llm_client import LLMClient

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


@dataclass
class HealthReport:
    backend: str
    database: str
    llm: str
    timestamp: str

    @property
    def is_healthy(self) -> bool:
        return self.backend == HEALTHY and self.database == HEALTHY and self.llm == HEALTHY


class HealthChecker:
    """Runs independent checks; a failing check only marks its own field."""

    def __init__(self, document_store: DocumentStore, llm_client: Optional[LLMClient]):
        self.document_store = document_store
        self.llm_client = llm_client

    def check(self) -> HealthReport:
        report = HealthReport(
            backend=HEALTHY,
            database=self._check_storage(),
            llm=self._check_llm(),
            timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )
        if not report.is_healthy:
            logger.warning(f"Health check degraded: database={report.database}, llm={report.llm}")
        return report

    def _check_storage(self) -> str:
        try:
            return HEALTHY if self.document_store.check_storage() else UNHEALTHY
        except Exception as e:
            logger.error(f"Storage health check failed: {e}")
            return UNHEALTHY

    def _check_llm(self) -> str:
        if self.llm_client is None:
            return UNHEALTHY
        try:
            return HEALTHY if self.llm_client.check_connection() else UNHEALTHY
        except Exception as e:
            logger.error(f"LLM health check failed: {e}")
            return UNHEALTHY
