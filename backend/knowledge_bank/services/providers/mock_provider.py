"""
Mock AI Provider.

Provides mock implementations for testing and fallback scenarios.
Does not make actual API calls, returns simulated responses.
"""
import re
from typing import Any, Dict, List

from ...core.logging_config import get_logger
from ...utils.filenames import strip_extension
from .base import AIProvider

logger = get_logger(__name__)

_WORD = re.compile(r"[^\W\d_]{4,}", re.UNICODE)


class MockProvider(AIProvider):
    """
    Mock AI Provider for development and tests.

    Derives a deterministic result from the file name and, for text files,
    from the first words of the content.
    """

    def analyze_document(self, content: bytes, mime_type: str, file_name: str) -> Dict[str, Any]:
        """Generate a mock analysis for testing."""
        text = ""
        if mime_type.startswith("text/"):
            text = content.decode("utf-8", errors="replace")

        keywords: List[str] = []
        for word in _WORD.findall(text.lower()):
            if word not in keywords:
                keywords.append(word)
            if len(keywords) >= 5:
                break
        if not keywords:
            keywords = [strip_extension(file_name) or "document"]

        return {
            "title": strip_extension(file_name) or file_name,
            "summary": "This is a MOCK summary. " + (text[:200] or f"File {file_name}."),
            "category": "General",
            "keywords": keywords,
            "relevanceScore": 0.5,
        }

    def suggest_keywords(self, topic: str) -> List[str]:
        """Generate mock keywords for testing."""
        keywords = [topic.strip()] if topic.strip() else []
        for word in _WORD.findall(topic.lower()):
            if word not in keywords:
                keywords.append(word)
        return keywords
