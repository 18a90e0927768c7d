"""
Event Controller - Product Change Events
=========================================

Handles Pub/Sub push messages emitted by commercetools subscriptions.

FLOW:
    decode envelope -> read product -> analyze image -> generate description
    -> create custom object -> update it with the description

Only products with the `generateDescription` attribute set to true are
processed. Everything else is acknowledged with 200 so Pub/Sub does not
redeliver it.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ValidationError

from src.infrastructure.config import get_settings
from src.infrastructure.llm import DescriptionService
from src.infrastructure.persistence import (
    create_product_custom_object,
    update_custom_object_with_description,
)
from src.infrastructure.vision import ProductAnalysis, ProductAnalysisService

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "❌ No data found in Pub/Sub message."
INVALID_DATA_MESSAGE = "❌ Invalid Pub/Sub message data."
MISSING_PRODUCT_ID_MESSAGE = "❌ No product ID found in Pub/Sub message."
GENERATION_DISABLED_MESSAGE = "❌ The option for automatic description generation is not enabled."


# ── Errors ─────────────────────────────────────────────────────────

class EventError(Exception):
    """An event that cannot be processed because of its content."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingMessageDataError(EventError):
    def __init__(self):
        super().__init__(NO_DATA_MESSAGE)


class InvalidMessageDataError(EventError):
    def __init__(self):
        super().__init__(INVALID_DATA_MESSAGE)


class MissingImageError(EventError):
    def __init__(self, product_id: str):
        super().__init__(f"❌ No image found for product {product_id}.")


class MissingProductIdError(EventError):
    def __init__(self):
        super().__init__(MISSING_PRODUCT_ID_MESSAGE)


# ── Envelope ───────────────────────────────────────────────────────

class PubSubMessage(BaseModel):
    data: Optional[str] = None
    messageId: Optional[str] = None
    attributes: Optional[dict] = None


class PubSubEnvelope(BaseModel):
    message: Optional[PubSubMessage] = None
    subscription: Optional[str] = None


# ── Product message ────────────────────────────────────────────────

class Image(BaseModel):
    url: Optional[str] = None


class Attribute(BaseModel):
    name: Optional[str] = None
    value: Any = None


class MasterVariant(BaseModel):
    images: Optional[List[Image]] = None
    attributes: Optional[List[Attribute]] = None


class ProductProjection(BaseModel):
    id: Optional[str] = None
    name: Union[Dict[str, Optional[str]], str, None] = None
    masterVariant: Optional[MasterVariant] = None


class Resource(BaseModel):
    typeId: Optional[str] = None
    id: Optional[str] = None


class ProductMessage(BaseModel):
    resource: Optional[Resource] = None
    productProjection: Optional[ProductProjection] = None


@dataclass
class ProductEvent:
    """The parts of a product message this service cares about."""
    type_id: Optional[str]
    product_id: str
    product_name: str
    image_url: Optional[str]
    generate_description: bool


def decode_message(envelope: PubSubEnvelope) -> dict:
    """Decode the base64 JSON payload of a Pub/Sub message."""
    if envelope.message is None or not envelope.message.data:
        raise MissingMessageDataError()

    try:
        raw = base64.b64decode(envelope.message.data, validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        logger.warning("Received Pub/Sub message with undecodable data")
        raise InvalidMessageDataError()

    if not isinstance(payload, dict):
        raise InvalidMessageDataError()
    return payload


def _localized(value: Any, locale: str) -> str:
    """Pick the configured locale from a LocalizedString, else the first one."""
    if isinstance(value, dict):
        if value.get(locale):
            return value[locale]
        return next((v for v in value.values() if v), "")
    return value or ""


def parse_product_event(payload: dict) -> ProductEvent:
    """Extract product fields from a decoded message payload."""
    settings = get_settings().product

    try:
        message = ProductMessage.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Received malformed product message: {e.error_count()} validation error(s)")
        raise InvalidMessageDataError()

    resource = message.resource or Resource()
    product = message.productProjection or ProductProjection()
    master_variant = product.masterVariant or MasterVariant()

    images = master_variant.images or []
    image_url = images[0].url if images else None

    generate = False
    for attribute in master_variant.attributes or []:
        if attribute.name == settings.generate_attribute:
            generate = attribute.value is True
            break

    return ProductEvent(
        type_id=resource.typeId,
        product_id=product.id or resource.id or "",
        product_name=_localized(product.name, settings.locale),
        image_url=image_url,
        generate_description=generate,
    )


# ── Collaborators ──────────────────────────────────────────────────

def analyze_product(image_url: str) -> ProductAnalysis:
    return ProductAnalysisService().analyze(image_url)


def generate_product_description(analysis: ProductAnalysis) -> str:
    return DescriptionService().generate(analysis)


# ── Handler ────────────────────────────────────────────────────────

def handle_event(body: dict) -> dict:
    """
    Process one Pub/Sub push request body.

    Returns:
        Response body for a 200 answer.

    Raises:
        EventError: the message cannot be processed (400).
        Exception: any downstream failure, unchanged.
    """
    try:
        envelope = PubSubEnvelope.model_validate(body or {})
    except ValidationError:
        raise InvalidMessageDataError()
    event = parse_product_event(decode_message(envelope))

    if event.type_id and event.type_id != "product":
        logger.warning(f"Ignoring event for resource type '{event.type_id}'")
        return {"message": f"Event ignored: resource type {event.type_id} is not a product."}

    if not event.product_id:
        raise MissingProductIdError()

    logger.info(f"Received product event: {event.product_id} ({event.product_name})")

    if not event.generate_description:
        logger.info(f"Description generation disabled for product {event.product_id}")
        return {
            "message": GENERATION_DISABLED_MESSAGE,
            "productId": event.product_id,
            "imageUrl": event.image_url,
            "productName": event.product_name,
        }

    if not event.image_url:
        raise MissingImageError(event.product_id)

    analysis = analyze_product(event.image_url)
    description = generate_product_description(analysis)

    create_product_custom_object(event.product_id, event.image_url, event.product_name)
    update_custom_object_with_description(
        event.product_id, description, event.image_url, event.product_name
    )

    logger.info(f"Description stored for product {event.product_id}")
    return {
        "productId": event.product_id,
        "productName": event.product_name,
        "imageUrl": event.image_url,
        "description": description,
        "productAnalysis": analysis.to_dict(),
    }
