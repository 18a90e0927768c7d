# Application Layer
# =================
# Use cases that orchestrate infrastructure services:
# - event_controller: product change event -> generated description
