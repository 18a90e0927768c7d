from .client import (
    ApiResponse,
    CommercetoolsApiError,
    CommercetoolsClient,
    get_api_client,
)

__all__ = ["ApiResponse", "CommercetoolsApiError", "CommercetoolsClient", "get_api_client"]
