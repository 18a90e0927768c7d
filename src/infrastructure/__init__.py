# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - commercetools/: platform API client (custom objects)
# - persistence/: custom object repository for generated descriptions
# - vision/: Google Cloud Vision product image analysis
# - llm/: OpenRouter LLM description generation
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting the application layer.
