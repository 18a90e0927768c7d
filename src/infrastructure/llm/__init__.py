from .description_service import DescriptionGenerationError, DescriptionService

__all__ = ["DescriptionGenerationError", "DescriptionService"]
