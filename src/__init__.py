# PixelPhraser - Product Description Generation
# ==============================================
# Generates product descriptions for commercetools products from their images.
#
# ARCHITECTURE LAYERS:
# - Presentation:   FastAPI webhook receiver (web/)
# - Application:    Event handling and orchestration (application/)
# - Infrastructure: External services (commercetools, Vision, LLM)
#
# Infrastructure components can be swapped without touching the event flow
# (e.g., another vision provider or another LLM).
