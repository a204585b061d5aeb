"""
OpenRouter AI Provider.

Sends the file inline (base64 data URI) to a multimodal model through the
OpenRouter API and asks for a JSON-schema constrained answer.
"""
import base64
import json
from typing import Any, Dict, List

from openai import OpenAI

from ...core.config import OPENROUTER_API_KEY, OPENROUTER_BASE_URL, OPENROUTER_MODEL
from ...core.logging_config import get_logger
from .base import (
    AIProvider,
    INDEXING_SCHEMA,
    KEYWORDS_SCHEMA,
    analysis_prompt,
    keywords_prompt,
)

logger = get_logger(__name__)


def _file_part(content: bytes, mime_type: str, file_name: str) -> Dict[str, Any]:
    """Build the message part carrying the file as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    data_uri = f"data:{mime_type};base64,{encoded}"
    if mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": data_uri}}
    return {"type": "file", "file": {"filename": file_name, "file_data": data_uri}}


def _json_schema_format(name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "strict": True, "schema": schema},
    }


class OpenRouterProvider(AIProvider):
    """
    AI Provider using OpenRouter API.

    Defaults to a Gemini model, which accepts PDFs and text files inline.
    """

    def __init__(self, client: OpenAI = None, model: str = OPENROUTER_MODEL):
        """Initialize OpenRouter provider with API key."""
        self.api_key = OPENROUTER_API_KEY
        self.model = model
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key
            )
        else:
            self.client = None

    def analyze_document(self, content: bytes, mime_type: str, file_name: str) -> Dict[str, Any]:
        """Analyze a document and return the schema-shaped JSON object."""
        if not self.client:
            raise ValueError("OpenRouter API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": analysis_prompt()},
                            _file_part(content, mime_type, file_name),
                        ],
                    }
                ],
                response_format=_json_schema_format("indexing_result", INDEXING_SCHEMA),
            )
            return json.loads(response.choices[0].message.content.strip())
        except Exception as e:
            logger.error(f"OpenRouter API Error (Analysis): {e}")
            raise e

    def suggest_keywords(self, topic: str) -> List[str]:
        """Suggest search keywords for a topic."""
        if not self.client:
            raise ValueError("OpenRouter API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": keywords_prompt(topic)}],
                response_format=_json_schema_format("topic_keywords", KEYWORDS_SCHEMA),
            )
            parsed = json.loads(response.choices[0].message.content.strip())
            keywords = parsed.get("keywords") if isinstance(parsed, dict) else None
            if not isinstance(keywords, list):
                raise ValueError("Invalid keyword response structure from OpenRouter")
            return keywords
        except Exception as e:
            logger.error(f"OpenRouter API Error (Keywords): {e}")
            raise e
