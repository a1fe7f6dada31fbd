"""Shared fixtures."""

import io
import logging
from typing import Iterator

import pytest

from posprint import Printer


@pytest.fixture(autouse=True)
def _propagate_package_logs() -> Iterator[None]:
    """Let caplog see records from the ``posprint`` logger tree."""
    logger = logging.getLogger("posprint")
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous


@pytest.fixture
def sink() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def printer(sink: io.BytesIO) -> Printer:
    return Printer(sink)
