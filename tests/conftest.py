"""Shared fixtures: product messages and a clean settings cache."""

from __future__ import annotations

import base64
import json

import pytest

from src.infrastructure.commercetools import get_api_client
from src.infrastructure.config import get_settings


def encode_message(payload) -> str:
    """Base64-encode a payload the way Pub/Sub push delivers it."""
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def product_payload(generate=True, images=None, type_id="product"):
    attributes = []
    if generate is not None:
        attributes.append({"name": "generateDescription", "value": generate})
    return {
        "resource": {"typeId": type_id, "id": "test-id"},
        "productProjection": {
            "id": "test-id",
            "masterVariant": {
                "images": [{"url": "https://test-image.jpg"}] if images is None else images,
                "attributes": attributes,
            },
            "name": {"en": "Test Product"},
        },
    }


@pytest.fixture
def make_envelope():
    def _make(**kwargs):
        return {"message": {"data": encode_message(product_payload(**kwargs)), "messageId": "1"}}
    return _make


@pytest.fixture
def envelope_for():
    def _envelope(payload):
        return {"message": {"data": encode_message(payload), "messageId": "1"}}
    return _envelope


@pytest.fixture(autouse=True)
def clear_caches():
    get_settings.cache_clear()
    get_api_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_client.cache_clear()
