"""
Description Service - LLM-Based Product Description Generation
===============================================================

ARCHITECTURAL DECISION:
- Uses OpenRouter API (OpenAI-compatible chat completions)
- Input is the image analysis only; no catalog data is sent
- Returns plain description text
- No fallback: a failed call surfaces to the caller

EXTENSIBILITY:
- To use different model: set LLM_MODEL
- To use OpenAI directly: change LLM_API_URL and key
"""

import logging

import requests

from ..config import get_settings
from ..vision import ProductAnalysis

logger = logging.getLogger(__name__)


class DescriptionGenerationError(Exception):
    """Raised when the LLM returns no usable description."""
    pass


class DescriptionService:
    """
    Product description generation using an LLM.

    USAGE:
        service = DescriptionService()
        text = service.generate(analysis)
    """

    # Prompt template for LLM
    PROMPT_TEMPLATE = (
        "You are a copywriter for an online store. Write a product description "
        "of 80 to 120 words based on the image analysis below. Describe the "
        "product, its key features, colors and style. Do not invent brand names "
        "or specifications that are not supported by the analysis. Reply with "
        "the description text only.\n\n"
        "Labels: {labels}\n"
        "Objects: {objects}\n"
        "Dominant colors: {colors}\n"
        "Text on product: {detected_text}\n"
        "Related web entities: {web_entities}"
    )

    def __init__(self):
        """Initialize description service with settings."""
        settings = get_settings()
        self._api_key = settings.llm.api_key
        self._api_url = settings.llm.api_url
        self._model = settings.llm.model
        self._temperature = settings.llm.temperature
        self._max_tokens = settings.llm.max_tokens
        self._timeout = settings.llm.timeout_seconds

    def build_prompt(self, analysis: ProductAnalysis) -> str:
        return self.PROMPT_TEMPLATE.format(
            labels=analysis.labels or "none",
            objects=analysis.objects or "none",
            colors=", ".join(analysis.colors) or "none",
            detected_text=analysis.detected_text or "none",
            web_entities=analysis.web_entities or "none",
        )

    def generate(self, analysis: ProductAnalysis) -> str:
        """
        Generate a product description.

        Args:
            analysis: Result of the product image analysis.

        Returns:
            Description text.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "https://github.com/pixelphraser",  # Required by OpenRouter
        }

        payload = {
            "model": self._model,
            "messages": [
                {
                    "role": "user",
                    "content": self.build_prompt(analysis)
                }
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        response = requests.post(
            self._api_url,
            headers=headers,
            json=payload,
            timeout=self._timeout
        )
        response.raise_for_status()

        description = self._extract_response_content(response.json())
        if not description:
            raise DescriptionGenerationError("LLM returned an empty description")

        logger.info(f"Generated description ({len(description)} chars)")
        return description

    def _extract_response_content(self, data: dict) -> str:
        """Extract text content from API response."""
        try:
            choices = data.get("choices", [])
            if choices:
                message = choices[0].get("message", {})
                return (message.get("content") or "").strip()
        except (KeyError, IndexError, TypeError, AttributeError):
            pass
        return ""
