"""Tests for LLM description generation."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.infrastructure.llm import DescriptionGenerationError, DescriptionService
from src.infrastructure.vision import ProductAnalysis

ANALYSIS = ProductAnalysis(
    labels="Shoe, Sneakers",
    objects="Shoe",
    colors=["rgb(255, 0, 0)"],
    detected_text="",
    web_entities="Running shoe",
)


def _response(json_data):
    response = MagicMock()
    response.json.return_value = json_data
    return response


@patch("src.infrastructure.llm.description_service.requests.post")
def test_generate_returns_completion_text(mock_post):
    mock_post.return_value = _response(
        {"choices": [{"message": {"content": "  A bright red running shoe.  "}}]}
    )

    assert DescriptionService().generate(ANALYSIS) == "A bright red running shoe."

    prompt = mock_post.call_args.kwargs["json"]["messages"][0]["content"]
    assert "Shoe, Sneakers" in prompt
    assert "rgb(255, 0, 0)" in prompt
    assert "Text on product: none" in prompt


@patch("src.infrastructure.llm.description_service.requests.post")
def test_empty_completion_raises(mock_post):
    mock_post.return_value = _response({"choices": []})

    with pytest.raises(DescriptionGenerationError):
        DescriptionService().generate(ANALYSIS)


@patch("src.infrastructure.llm.description_service.requests.post")
def test_http_error_propagates(mock_post):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("429 Too Many Requests")
    mock_post.return_value = response

    with pytest.raises(requests.HTTPError, match="429"):
        DescriptionService().generate(ANALYSIS)
