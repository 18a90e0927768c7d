"""
Custom Object Repository - Generated Description Persistence
=============================================================

Descriptions are stored as commercetools custom objects in a single
container, keyed by product ID. A record is created empty when a product
event arrives and updated once the description has been generated.
"""

import logging
from datetime import datetime, timezone

from ..commercetools import get_api_client
from ..config import get_settings

logger = logging.getLogger(__name__)


class CustomObjectNotFoundError(Exception):
    """Raised when the custom object to update does not exist."""

    def __init__(self, product_id: str):
        super().__init__(f"❌ Custom object not found for product ID: {product_id}")
        self.product_id = product_id


class CustomObjectVersionError(Exception):
    """Raised when a fetched custom object has no version to update against."""

    def __init__(self, product_id: str):
        super().__init__(f"❌ Custom object for product ID {product_id} has no version")
        self.product_id = product_id


def _container() -> str:
    return get_settings().commercetools.custom_object_container


def create_product_custom_object(product_id: str, image_url: str, product_name: str) -> dict:
    """
    Create the custom object for a product with no description yet.

    Returns:
        The created custom object as returned by the API.
    """
    container = _container()
    try:
        custom_object = get_api_client().post_custom_object({
            "container": container,
            "key": product_id,
            "value": {
                "temporaryDescription": None,
                "imageUrl": image_url,
                "productName": product_name,
            },
        })
    except Exception as e:
        logger.error(f"Failed to create custom object for product {product_id}: {e}")
        raise

    logger.info(f"Custom object created for product {product_id} in container '{container}'")
    return custom_object


def update_custom_object_with_description(
    product_id: str,
    description: str,
    image_url: str,
    product_name: str,
) -> dict:
    """
    Store the generated description on the product's custom object.

    The current version is read first and sent back with the update, so a
    concurrent write makes the API reject this one instead of overwriting it.

    Raises:
        CustomObjectNotFoundError: no custom object exists for the product.
        CustomObjectVersionError: the stored custom object carries no version.
    """
    container = _container()
    client = get_api_client()

    try:
        existing = client.get_custom_object(container, product_id)
        if existing.body is None:
            raise CustomObjectNotFoundError(product_id)

        version = existing.body.get("version")
        if version is None:
            raise CustomObjectVersionError(product_id)

        updated = client.post_custom_object({
            "container": container,
            "key": product_id,
            "version": version,
            "value": {
                "temporaryDescription": description,
                "imageUrl": image_url,
                "productName": product_name,
                "generatedAt": datetime.now(timezone.utc).isoformat(),
            },
        })
    except Exception as e:
        logger.error(f"Failed to update custom object for product {product_id}: {e}")
        raise

    logger.info(f"Custom object updated with description for product {product_id}")
    return updated
