import os
import sys
from pathlib import Path

# Run against the in-memory adapters and the offline provider
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_TYPE"] = "memory"
os.environ["STORAGE_TYPE"] = "memory"
os.environ["AUTH_TYPE"] = "memory"
os.environ["AI_PROVIDER"] = "mock"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("OPENROUTER_API_KEY", None)
os.environ.pop("ANTHROPIC_API_KEY", None)

# Add the backend directory to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from knowledge_bank.services.ai_service import AIService
from knowledge_bank.services.database import MemoryAdapter
from knowledge_bank.services.providers import AIProvider
from knowledge_bank.services.quota_service import QuotaService
from knowledge_bank.services.search_service import SearchService
from knowledge_bank.services.storage import MemoryFileStorage
from knowledge_bank.services.submission_service import SubmissionService

REPORT_ANALYSIS = {
    "title": "Informe anual",
    "summary": "Resumen del informe anual de la empresa.",
    "category": "Finanzas",
    "keywords": ["informe", "finanzas", "resultados"],
    "relevanceScore": 0.8,
}


class StubProvider(AIProvider):
    """Provider returning canned answers and recording its calls."""

    def __init__(self, analysis=None, keywords=None, fail_analysis=False, fail_keywords=False):
        self.analysis = analysis if analysis is not None else dict(REPORT_ANALYSIS)
        self.keywords = keywords if keywords is not None else []
        self.fail_analysis = fail_analysis
        self.fail_keywords = fail_keywords
        self.analyzed = []
        self.topics = []

    def analyze_document(self, content, mime_type, file_name):
        self.analyzed.append((file_name, mime_type))
        if self.fail_analysis:
            raise RuntimeError("provider unavailable")
        return self.analysis

    def suggest_keywords(self, topic):
        self.topics.append(topic)
        if self.fail_keywords:
            raise RuntimeError("provider unavailable")
        return list(self.keywords)


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def ai_service(provider):
    return AIService(provider=provider)


@pytest.fixture
def db():
    return MemoryAdapter()


@pytest.fixture
def storage():
    return MemoryFileStorage()


@pytest.fixture
def quota_service(db):
    return QuotaService(db, limit=5)


@pytest.fixture
def submission_service(ai_service, storage, db, quota_service):
    return SubmissionService(ai_service, storage, db, quota_service)


@pytest.fixture
def search_service(ai_service, db):
    return SearchService(ai_service, db)
