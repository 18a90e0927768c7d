"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses, one group per external collaborator
- Single source of truth for all configurable values

EXTENSIBILITY:
- To target another commercetools region: set CTP_AUTH_URL / CTP_API_URL
- To switch LLM provider: point LLM_API_URL at any OpenAI-compatible endpoint
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file if present (development convenience)
load_dotenv()


@dataclass(frozen=True)
class CommercetoolsSettings:
    """commercetools API client credentials and endpoints."""

    project_key: str = field(default_factory=lambda: os.getenv("CTP_PROJECT_KEY", ""))
    client_id: str = field(default_factory=lambda: os.getenv("CTP_CLIENT_ID", ""))
    client_secret: str = field(default_factory=lambda: os.getenv("CTP_CLIENT_SECRET", ""))
    scope: str = field(default_factory=lambda: os.getenv("CTP_SCOPE", ""))
    auth_url: str = field(
        default_factory=lambda: os.getenv(
            "CTP_AUTH_URL", "https://auth.europe-west1.gcp.commercetools.com"
        )
    )
    api_url: str = field(
        default_factory=lambda: os.getenv(
            "CTP_API_URL", "https://api.europe-west1.gcp.commercetools.com"
        )
    )

    # Custom objects holding generated descriptions live in this container
    custom_object_container: str = "temporaryDescription"

    timeout_seconds: int = 15


@dataclass(frozen=True)
class VisionSettings:
    """Google Cloud Vision settings for product image analysis."""

    api_key: str = field(default_factory=lambda: os.getenv("GOOGLE_VISION_API_KEY", ""))
    api_url: str = "https://vision.googleapis.com/v1/images:annotate"

    max_results: int = 10
    max_colors: int = 3
    timeout_seconds: int = 30


@dataclass(frozen=True)
class LLMSettings:
    """OpenRouter LLM settings for description generation."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""))
    api_url: str = field(
        default_factory=lambda: os.getenv(
            "LLM_API_URL", "https://openrouter.ai/api/v1/chat/completions"
        )
    )
    model: str = field(
        default_factory=lambda: os.getenv("LLM_MODEL", "meta-llama/llama-3.2-3b-instruct:free")
    )

    # Some creativity, but stay on the facts from the analysis
    temperature: float = 0.4
    max_tokens: int = 400
    timeout_seconds: int = 60


@dataclass(frozen=True)
class ProductSettings:
    """How product payloads are read."""

    locale: str = field(default_factory=lambda: os.getenv("PRODUCT_LOCALE", "en"))
    generate_attribute: str = "generateDescription"


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from src.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.commercetools.project_key)
    """

    # Sub-settings groups
    commercetools: CommercetoolsSettings = field(default_factory=CommercetoolsSettings)
    vision: VisionSettings = field(default_factory=VisionSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)
    product: ProductSettings = field(default_factory=ProductSettings)

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        ct = self.commercetools
        missing = [
            name for name, value in (
                ("CTP_PROJECT_KEY", ct.project_key),
                ("CTP_CLIENT_ID", ct.client_id),
                ("CTP_CLIENT_SECRET", ct.client_secret),
            )
            if not value
        ]
        if missing:
            issues.append(
                f"WARNING: {', '.join(missing)} not set. "
                "Custom objects cannot be stored."
            )

        if not self.vision.api_key:
            issues.append(
                "WARNING: GOOGLE_VISION_API_KEY not set. "
                "Product images cannot be analyzed."
            )

        if not self.llm.api_key:
            issues.append(
                "WARNING: OPENROUTER_API_KEY not set. "
                "Descriptions cannot be generated."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
