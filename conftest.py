"""Shared fixtures for the token build tests."""

import pytest
from app.config.settings import SHORT_KEY_ROOTS
from app.lib.flatten import tokens_flatten
from app.lib.parser import ReferenceIndex

GENERATED: str = "2025-01-01T00:00:00.000Z"


@pytest.fixture
def document() -> dict:
    """A small document touching every bundle-relevant root."""
    return {
        "$themes": [],
        "$metadata": {"tokenSetOrder": ["Foundations", "Theme"]},
        "Foundations": {
            "Blue": {
                "500": {"$value": "#335CFF", "$type": "color"},
                "700": {"$value": "#2547D0", "$type": "color"},
            },
            "Font Family": {
                "Sans": {"$value": "Inter Display", "$type": "fontFamilies"},
            },
        },
        "Theme": {
            "Primary": {
                "Base": {"$value": "{Blue.500}", "$type": "color"},
                "Dark": {"$value": "{Foundations.Blue.700}", "$type": "color"},
                "Hover": {"$value": "{Theme.Primary.Base}", "$type": "color"},
            },
        },
        "Spacing": {
            "Small": {"$value": "4", "$type": "spacing"},
            "Medium": {"$value": 8, "$type": "spacing"},
            "Inset": {"$value": "{Small} {Medium}", "$type": "spacing"},
        },
        "Typography": {
            "Body": {
                "Family": {"$value": "{Font Family.Sans}", "$type": "fontFamilies"},
                "Weight": {"$value": "Semi Bold", "$type": "fontWeights"},
            },
        },
    }


@pytest.fixture
def generated() -> str:
    """Fixed header timestamp for reproducible output."""
    return GENERATED


@pytest.fixture
def tokens(document: dict) -> list:
    return tokens_flatten(document)


@pytest.fixture
def index(tokens: list) -> ReferenceIndex:
    return ReferenceIndex.from_tokens(tokens, SHORT_KEY_ROOTS)
