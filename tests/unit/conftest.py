"""Configuration for unit tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Capture exporter debug logging during unit tests."""
    caplog.set_level(logging.DEBUG, logger="google_photos_exporter")
    yield
