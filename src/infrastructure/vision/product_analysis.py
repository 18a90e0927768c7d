"""
Product Analysis Service - Image Analysis via Google Cloud Vision
==================================================================

ARCHITECTURAL DECISION:
- Uses the Cloud Vision REST endpoint (images:annotate) with an API key
- One request per image, all features requested at once
- Returns a flat ProductAnalysis - no description logic here

EXTENSIBILITY:
- To add a feature: extend FEATURES and map it in _to_analysis()
- To use another provider: implement analyze() returning ProductAnalysis
"""

import logging
from dataclasses import dataclass, field
from typing import List

import requests

from ..config import get_settings

logger = logging.getLogger(__name__)


class ProductAnalysisError(Exception):
    """Raised when the Vision API reports an error for the image."""
    pass


@dataclass
class ProductAnalysis:
    """What the Vision API found in a product image."""
    labels: str = ""
    objects: str = ""
    colors: List[str] = field(default_factory=list)
    detected_text: str = ""
    web_entities: str = ""

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys used in API responses."""
        return {
            "labels": self.labels,
            "objects": self.objects,
            "colors": list(self.colors),
            "detectedText": self.detected_text,
            "webEntities": self.web_entities,
        }


class ProductAnalysisService:
    """
    Image analysis service using Google Cloud Vision.

    USAGE:
        service = ProductAnalysisService()
        analysis = service.analyze("https://images.example.com/shoe.jpg")
        print(analysis.labels)  # "Shoe, Footwear, Sneakers"
    """

    FEATURES = (
        "LABEL_DETECTION",
        "OBJECT_LOCALIZATION",
        "IMAGE_PROPERTIES",
        "TEXT_DETECTION",
        "WEB_DETECTION",
    )

    def __init__(self):
        settings = get_settings()
        self._api_key = settings.vision.api_key
        self._api_url = settings.vision.api_url
        self._max_results = settings.vision.max_results
        self._max_colors = settings.vision.max_colors
        self._timeout = settings.vision.timeout_seconds

    def analyze(self, image_url: str) -> ProductAnalysis:
        """
        Analyze a product image.

        Args:
            image_url: Publicly reachable URL of the image.

        Returns:
            ProductAnalysis for the image.
        """
        payload = {
            "requests": [
                {
                    "image": {"source": {"imageUri": image_url}},
                    "features": [
                        {"type": feature, "maxResults": self._max_results}
                        for feature in self.FEATURES
                    ],
                }
            ]
        }

        logger.info(f"Analyzing image: {image_url}")
        response = requests.post(
            self._api_url,
            params={"key": self._api_key},
            json=payload,
            timeout=self._timeout,
        )
        response.raise_for_status()

        responses = response.json().get("responses") or [{}]
        result = responses[0]

        if "error" in result:
            message = result["error"].get("message", "unknown error")
            raise ProductAnalysisError(f"Vision API error for {image_url}: {message}")

        analysis = self._to_analysis(result)
        logger.debug(f"Image analysis: {analysis}")
        return analysis

    def _to_analysis(self, result: dict) -> ProductAnalysis:
        """Map a single annotate response to ProductAnalysis."""
        labels = [a.get("description", "") for a in result.get("labelAnnotations", [])]
        objects = [a.get("name", "") for a in result.get("localizedObjectAnnotations", [])]

        dominant = (
            result.get("imagePropertiesAnnotation", {})
            .get("dominantColors", {})
            .get("colors", [])
        )
        colors = [self._format_color(c.get("color", {})) for c in dominant[:self._max_colors]]

        text_annotations = result.get("textAnnotations", [])
        detected_text = text_annotations[0].get("description", "").strip() if text_annotations else ""

        web_entities = [
            e["description"]
            for e in result.get("webDetection", {}).get("webEntities", [])
            if e.get("description")
        ]

        return ProductAnalysis(
            labels=", ".join(filter(None, labels)),
            objects=", ".join(filter(None, objects)),
            colors=colors,
            detected_text=detected_text,
            web_entities=", ".join(web_entities),
        )

    @staticmethod
    def _format_color(color: dict) -> str:
        # Vision omits channels that are zero
        return f"rgb({int(color.get('red', 0))}, {int(color.get('green', 0))}, {int(color.get('blue', 0))})"
