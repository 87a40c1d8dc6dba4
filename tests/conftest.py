from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from kado_ai.config import AIBackendConfig
from tests._fixtures.iac_builder import IacBuilder
from tests._fixtures.transport import RecordingTransport


@pytest.fixture
def iac_builder(tmp_path: Path) -> IacBuilder:
    """Provide a reusable IaC tree builder rooted at the pytest tmp_path."""
    return IacBuilder(tmp_path)


@pytest.fixture
def transport() -> RecordingTransport:
    """Provide a transport double that never touches the network."""
    return RecordingTransport()


@pytest.fixture
def messages_config() -> AIBackendConfig:
    return AIBackendConfig(api_key="test-api-key", model="test-model", backend="anthropic_messages")


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers a CLI test bound to captured streams."""
    yield
    logger = logging.getLogger("kado_ai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
