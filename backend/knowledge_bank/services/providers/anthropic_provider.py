"""
Anthropic AI Provider.

Provides AI capabilities using Anthropic's Claude API directly.
Structured output is obtained by forcing a tool call whose input schema
is the indexing schema.
"""
import base64
from typing import Any, Dict, List

import anthropic

from ...core.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL
from ...core.logging_config import get_logger
from .base import (
    AIProvider,
    INDEXING_SCHEMA,
    KEYWORDS_SCHEMA,
    analysis_prompt,
    keywords_prompt,
)

logger = get_logger(__name__)


def _content_block(content: bytes, mime_type: str) -> Dict[str, Any]:
    """Wrap the file in the content block type Claude expects for it."""
    if mime_type.startswith("text/"):
        return {
            "type": "document",
            "source": {
                "type": "text",
                "media_type": "text/plain",
                "data": content.decode("utf-8", errors="replace"),
            },
        }
    encoded = base64.b64encode(content).decode("ascii")
    if mime_type.startswith("image/"):
        return {
            "type": "image",
            "source": {"type": "base64", "media_type": mime_type, "data": encoded},
        }
    return {
        "type": "document",
        "source": {"type": "base64", "media_type": mime_type, "data": encoded},
    }


class AnthropicProvider(AIProvider):
    """
    AI Provider using Anthropic Claude API directly.
    """

    def __init__(self, client: anthropic.Anthropic = None, model: str = ANTHROPIC_MODEL):
        """Initialize Anthropic provider with API key."""
        self.api_key = ANTHROPIC_API_KEY
        self.model = model
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

    def _call_tool(self, tool_name: str, schema: Dict[str, Any], content: List[Dict[str, Any]], max_tokens: int) -> Dict[str, Any]:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            tools=[
                {
                    "name": tool_name,
                    "description": "Record the structured answer.",
                    "input_schema": schema,
                }
            ],
            tool_choice={"type": "tool", "name": tool_name},
            messages=[{"role": "user", "content": content}],
        )
        for block in message.content:
            if block.type == "tool_use" and block.name == tool_name:
                return block.input
        raise ValueError(f"Claude did not call the {tool_name} tool")

    def analyze_document(self, content: bytes, mime_type: str, file_name: str) -> Dict[str, Any]:
        """Analyze a document and return the schema-shaped JSON object."""
        if not self.client:
            raise ValueError("Anthropic API key not configured")

        try:
            return self._call_tool(
                "record_indexing_result",
                INDEXING_SCHEMA,
                [
                    _content_block(content, mime_type),
                    {"type": "text", "text": analysis_prompt()},
                ],
                max_tokens=2000,
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Analysis): {e}")
            raise e

    def suggest_keywords(self, topic: str) -> List[str]:
        """Suggest search keywords for a topic."""
        if not self.client:
            raise ValueError("Anthropic API key not configured")

        try:
            result = self._call_tool(
                "record_keywords",
                KEYWORDS_SCHEMA,
                [{"type": "text", "text": keywords_prompt(topic)}],
                max_tokens=300,
            )
            keywords = result.get("keywords")
            if not isinstance(keywords, list):
                raise ValueError("Invalid keyword response structure from Anthropic")
            return keywords
        except Exception as e:
            logger.error(f"Anthropic API Error (Keywords): {e}")
            raise e
