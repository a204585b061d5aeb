import asyncio
from numbers import Real
from typing import Any, List, Optional

from ..api.exceptions import AnalysisError
from ..core.logging_config import get_logger
from ..domain.entities import IndexingResult
from .providers import AIProvider, AIProviderFactory

logger = get_logger(__name__)


def parse_indexing_result(payload: Any) -> IndexingResult:
    """
    Validate a provider payload and convert it into an IndexingResult.

    Requires non-empty title, summary and category, a non-empty keywords
    list and a numeric relevanceScore. The score is clamped to [0, 1].

    Raises:
        AnalysisError: If the payload does not match the indexing schema
    """
    if not isinstance(payload, dict):
        raise AnalysisError()

    title = payload.get("title")
    summary = payload.get("summary")
    category = payload.get("category")
    keywords = payload.get("keywords")
    score = payload.get("relevanceScore")

    if not (title and summary and category):
        raise AnalysisError()
    if not all(isinstance(value, str) for value in (title, summary, category)):
        raise AnalysisError()
    if not isinstance(keywords, list):
        raise AnalysisError()
    if isinstance(score, bool) or not isinstance(score, Real):
        raise AnalysisError()

    keywords = [k.strip() for k in keywords if isinstance(k, str) and k.strip()]
    if not keywords:
        raise AnalysisError()

    return IndexingResult(
        category=category.strip(),
        title=title.strip(),
        summary=summary.strip(),
        keywords=keywords,
        relevance_score=min(max(float(score), 0.0), 1.0),
    )


class AIService:
    """
    AI service implementation.
    Runs the blocking provider SDK calls off the event loop and validates
    their output.
    """
    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or AIProviderFactory.get_provider()
        logger.info(f"Initialized AIService with provider: {type(self.provider).__name__}")

    async def analyze_document(self, content: bytes, mime_type: str, file_name: str) -> IndexingResult:
        """
        Index a document with the AI provider.

        Raises:
            AnalysisError: If the call fails or the response is malformed
        """
        logger.debug(f"Analyzing {file_name} ({mime_type}, {len(content)} bytes)")
        loop = asyncio.get_event_loop()
        try:
            payload = await loop.run_in_executor(
                None, self.provider.analyze_document, content, mime_type, file_name
            )
        except Exception as e:
            logger.error(f"AI Service Error analyzing document: {e}", exc_info=True)
            raise AnalysisError() from e

        try:
            result = parse_indexing_result(payload)
        except AnalysisError:
            logger.error(f"Invalid response structure from AI provider: {payload!r}")
            raise
        logger.debug(f"Document analyzed: category={result.category}, keywords={result.keywords}")
        return result

    async def keywords_for_topic(self, topic: str) -> List[str]:
        """
        Suggest search keywords for a topic.

        Falls back to a plain whitespace split of the topic if the AI call fails.
        """
        loop = asyncio.get_event_loop()
        try:
            keywords = await loop.run_in_executor(None, self.provider.suggest_keywords, topic)
            if not isinstance(keywords, list):
                raise ValueError("Keyword suggestion is not a list")
            return [k for k in keywords if isinstance(k, str)]
        except Exception as e:
            logger.error(f"Error getting keywords for topic, falling back to split: {e}")
            return topic.split()
