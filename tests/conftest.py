"""
Pytest Configuration and Fixtures

Seeds the environment required by Settings before any slidesage module is
imported, and provides shared paragraph fixtures for chunking tests.
"""

import os

import pytest
from dotenv import load_dotenv

load_dotenv()  # .env → os.environ (no-op if file is missing)

_test_env = {
    "POSTGRES_USER": "slidesage",
    "POSTGRES_PASSWORD": "slidesage_password",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
    "POSTGRES_DB": "slidesage_db",
    "GEMINI_API_KEY": "test-api-key",
    "LOG_LEVEL": "INFO",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

from slidesage.schemas.chunking import Paragraph  # noqa: E402

# 50 characters, no lists, tables, or numbers
SHORT_PARAGRAPH = "Market outlook remains constructive for all assets"

# 425 characters: one list item, four sentences, one with a percentage
LIST_ITEM = "- Increase allocation to investment grade bonds."
OPENING = (
    "The committee reviewed the portfolio positioning for the coming year "
    "and agreed on several adjustments."
)
RETURNS_SENTENCE = (
    "Returns were up 12% in Q3 driven by strong equity performance "
    "across developed markets."
)
EMERGING_SENTENCE = (
    "Emerging market exposure will be kept neutral until currency "
    "volatility subsides meaningfully."
)
DURATION_SENTENCE = (
    "Duration risk remains the main concern for the fixed income sleeve "
    "over the next quarter."
)
LONG_PARAGRAPH = (
    f"{OPENING}\n{LIST_ITEM}\n{RETURNS_SENTENCE} {EMERGING_SENTENCE} {DURATION_SENTENCE}"
)


@pytest.fixture()
def two_paragraph_deck() -> list[Paragraph]:
    """Short plain paragraph on page 1, long mixed-content paragraph on page 2."""
    return [
        Paragraph(text=SHORT_PARAGRAPH, metadata={"page": 1, "file_name": "deck.pdf"}),
        Paragraph(text=LONG_PARAGRAPH, metadata={"page": 2, "file_name": "deck.pdf"}),
    ]
