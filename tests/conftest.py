"""
Shared fixtures for decoder tests.
"""

import pytest
import structlog

from plessey.barcode import PlesseyDecoder
from plessey.config import DecoderSettings


@pytest.fixture
def settings() -> DecoderSettings:
    return DecoderSettings(_env_file=None)


@pytest.fixture
def decoder(settings: DecoderSettings) -> PlesseyDecoder:
    return PlesseyDecoder(settings=settings)


@pytest.fixture
def normalizing_decoder(settings: DecoderSettings) -> PlesseyDecoder:
    return PlesseyDecoder(settings=settings, normalize_bar_space_width=True)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
