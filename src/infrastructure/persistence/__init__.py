from .custom_object_repository import (
    CustomObjectNotFoundError,
    CustomObjectVersionError,
    create_product_custom_object,
    update_custom_object_with_description,
)

__all__ = [
    "CustomObjectNotFoundError",
    "CustomObjectVersionError",
    "create_product_custom_object",
    "update_custom_object_with_description",
]
