"""Shared fixtures for the test suite."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from src.utils.config import AppConfig

from tests.samples import FOO_PHP, EchoClient


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    package_logger = logging.getLogger("src")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def echo_client() -> EchoClient:
    return EchoClient()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A source directory holding a single PHP file with class Foo."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "Foo.php").write_text(FOO_PHP)
    return src


@pytest.fixture
def app_config(tmp_path: Path, source_tree: Path) -> AppConfig:
    """Default configuration pointed at the temporary source tree."""
    config = AppConfig()
    config.source.root_dir = str(source_tree)
    config.output.path = str(tmp_path / "DOCUMENTATION.md")
    config.backend.retry_base_delay = 0.0
    return config
