"""Shared test fixtures for syntaxbot test suite."""

import logging
from pathlib import Path

import pytest

from syntaxbot.core.commands.handlers import HandlerRegistry
from syntaxbot.core.context import SharedContext
from syntaxbot.utils.config import Config, ManagerConfig


class FakeChannel:
    """Channel that records everything sent to it."""

    def __init__(self):
        self.sent: list[str] = []

    async def send(self, content: str) -> None:
        self.sent.append(content)

    @property
    def last(self) -> str:
        return self.sent[-1]


@pytest.fixture(autouse=True)
def restore_logging_handlers():
    """Close and drop any handlers a test adds to the syntaxbot logger."""
    logger = logging.getLogger("syntaxbot")
    saved = list(logger.handlers)
    yield
    for handler in logger.handlers:
        if handler not in saved:
            handler.close()
    logger.handlers = saved


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def manager_config() -> ManagerConfig:
    """Default dispatcher settings with a small page size."""
    return ManagerConfig(name="Test", commands_per_page=2)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    return Config(workspace=tmp_path)


@pytest.fixture
def commands_dir(test_config: Config) -> Path:
    """Empty commands directory inside the test workspace."""
    test_config.commands_path.mkdir(parents=True)
    return test_config.commands_path


@pytest.fixture
def handlers() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def test_context(test_config: Config, handlers: HandlerRegistry) -> SharedContext:
    """SharedContext with test config and no message buses."""
    return SharedContext(config=test_config, handlers=handlers, buses=[])


@pytest.fixture
def anyio_backend() -> str:
    """The code under test is built on asyncio."""
    return "asyncio"
