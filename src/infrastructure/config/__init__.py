from .settings import (
    Settings,
    CommercetoolsSettings,
    VisionSettings,
    LLMSettings,
    ProductSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "CommercetoolsSettings",
    "VisionSettings",
    "LLMSettings",
    "ProductSettings",
    "get_settings",
]
