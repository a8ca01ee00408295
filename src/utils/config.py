"""Configuration loader and validator for the class documentation generator.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses. Every default matches
the behaviour of a run without any config file.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PROVIDERS = ("ollama", "anthropic")


@dataclass
class ProjectConfig:
    """Project metadata used in the introduction block."""

    name: str = "YourPackage"
    description: str = (
        "This package provides essential tools and utilities for your applications."
    )
    install_command: str = "composer require yourvendor/yourpackage"
    namespace: str = "YourPackage"


@dataclass
class SourceConfig:
    """Where to look for source files."""

    root_dir: str = "src"
    extensions: list[str] = field(default_factory=lambda: [".php"])
    exclude_dirs: list[str] = field(default_factory=list)


@dataclass
class BackendConfig:
    """Configuration for the completion backend."""

    provider: str = "ollama"
    command: str = "ollama"
    model: str = "phi4:latest"
    timeout_seconds: float = 600.0
    retry_max_attempts: int = 2
    retry_base_delay: float = 1.0
    fail_fast: bool = False
    max_tokens: int = 4096
    temperature: float = 0.2


@dataclass
class OutputConfig:
    """Configuration for documentation output."""

    path: str = "DOCUMENTATION.md"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_backend_config(data: dict) -> BackendConfig:
    """Build a BackendConfig from a dictionary.

    Args:
        data: Dictionary with backend settings.

    Returns:
        A configured BackendConfig instance.

    Raises:
        ValueError: If the provider is not supported.
    """
    defaults = BackendConfig()
    provider = data.get("provider", defaults.provider)
    if provider not in _PROVIDERS:
        raise ValueError(
            f"Unsupported backend provider {provider!r}; "
            f"expected one of {', '.join(_PROVIDERS)}"
        )

    if provider == "anthropic" and not os.getenv("ANTHROPIC_API_KEY"):
        logger.warning("ANTHROPIC_API_KEY not set in environment")

    return BackendConfig(
        provider=provider,
        command=data.get("command", defaults.command),
        model=data.get("model", defaults.model),
        timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
        retry_max_attempts=max(
            1, int(data.get("retry_max_attempts", defaults.retry_max_attempts))
        ),
        retry_base_delay=float(data.get("retry_base_delay", defaults.retry_base_delay)),
        fail_fast=bool(data.get("fail_fast", defaults.fail_fast)),
        max_tokens=data.get("max_tokens", defaults.max_tokens),
        temperature=data.get("temperature", defaults.temperature),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
        ValueError: If a section holds an unsupported value.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    project_data = raw.get("project") or {}
    project_defaults = ProjectConfig()
    project_config = ProjectConfig(
        name=project_data.get("name", project_defaults.name),
        description=project_data.get("description", project_defaults.description),
        install_command=project_data.get(
            "install_command", project_defaults.install_command
        ),
        namespace=project_data.get("namespace", project_defaults.namespace),
    )

    source_data = raw.get("source") or {}
    source_config = SourceConfig(
        root_dir=source_data.get("root_dir", "src"),
        extensions=source_data.get("extensions", [".php"]),
        exclude_dirs=source_data.get("exclude_dirs") or [],
    )

    output_data = raw.get("output") or {}
    output_config = OutputConfig(
        path=output_data.get("path", "DOCUMENTATION.md"),
    )

    logging_data = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        project=project_config,
        source=source_config,
        backend=_build_backend_config(raw.get("backend") or {}),
        output=output_config,
        logging=logging_config,
    )
