"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
all abstract methods.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ...core.config import ANALYSIS_LANGUAGE

# Strict output schema for document indexing
INDEXING_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "summary": {"type": "string"},
        "category": {"type": "string"},
        "keywords": {
            "type": "array",
            "items": {"type": "string"},
        },
        "relevanceScore": {"type": "number"},
    },
    "required": ["title", "summary", "category", "keywords", "relevanceScore"],
    "additionalProperties": False,
}

# Strict output schema for topic keyword suggestion
KEYWORDS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "keywords": {
            "type": "array",
            "items": {"type": "string"},
        },
    },
    "required": ["keywords"],
    "additionalProperties": False,
}


def analysis_prompt(language: str = ANALYSIS_LANGUAGE) -> str:
    return (
        f"Analyze the following document. Your ENTIRE answer, including the title, "
        f"summary, category and keywords, must be written exclusively in {language}. "
        f"Provide a concise title, a detailed summary (about 150 words), a relevant "
        f"category from a general list (e.g. Technology, Science, Art, History, Finance), "
        f"a list of 5 to 7 keywords, and a relevance score from 0 to 1 indicating the "
        f"value of the document for a knowledge base."
    )


def keywords_prompt(topic: str, language: str = ANALYSIS_LANGUAGE) -> str:
    return (
        f'Based on the user\'s search topic "{topic}", generate a list of 5 to 10 relevant '
        f"and diverse keywords that could be used to find related documents in a database. "
        f"The keywords should cover synonyms, related concepts and specific terms. "
        f"Answer exclusively in {language}."
    )


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Providers return the raw decoded JSON object; validation into an
    IndexingResult happens in AIService.
    """

    @abstractmethod
    def analyze_document(self, content: bytes, mime_type: str, file_name: str) -> Dict[str, Any]:
        """
        Extract title, summary, category, keywords and relevanceScore from a file.

        Args:
            content: Raw file bytes (sent inline as base64)
            mime_type: Declared media type of the file
            file_name: Original file name

        Returns:
            Decoded JSON object following INDEXING_SCHEMA
        """
        pass

    @abstractmethod
    def suggest_keywords(self, topic: str) -> List[str]:
        """
        Suggest search keywords for a free-text topic.

        Args:
            topic: User's search topic

        Returns:
            List of keyword strings
        """
        pass
