"""Completion clients for the documentation backend.

Every client offers the same capability, complete(prompt) -> str, and
raises BackendError once a request has failed on every retry attempt.
OllamaClient shells out to the `ollama` CLI; AnthropicClient calls the
Anthropic Messages API.
"""

import logging
import os
import subprocess
import time
from collections.abc import Callable
from typing import Optional, Protocol, TypeVar

import anthropic

from src.errors import BackendError
from src.utils.config import BackendConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CompletionClient(Protocol):
    """Anything that turns a prompt into generated text."""

    def complete(self, prompt: str) -> str: ...


def _with_retry(
    operation: Callable[[], T],
    max_attempts: int,
    base_delay: float,
    description: str,
) -> T:
    """Run an operation, retrying BackendError with exponential backoff.

    Args:
        operation: Callable performing one attempt.
        max_attempts: Total number of attempts, at least one.
        base_delay: Delay before the first retry, doubled each time.
        description: What is being attempted, for log messages.

    Returns:
        The operation's result.

    Raises:
        BackendError: If all attempts fail.
    """
    attempts = max(max_attempts, 1)
    last_error: Optional[BackendError] = None

    for attempt in range(attempts):
        try:
            return operation()
        except BackendError as e:
            if not e.retryable:
                raise
            last_error = e
            if attempt + 1 >= attempts:
                break
            delay = base_delay * (2**attempt)
            logger.warning(
                "%s failed (attempt %d/%d): %s; retrying in %.1f seconds",
                description,
                attempt + 1,
                attempts,
                e,
                delay,
            )
            time.sleep(delay)

    raise BackendError(f"{description} failed after {attempts} attempts: {last_error}")


class OllamaClient:
    """Runs `ollama run <model> <prompt>` once per completion.

    The prompt is passed as a single process argument, so no shell
    quoting is involved. Only standard output is used as the response.
    """

    def __init__(self, config: Optional[BackendConfig] = None) -> None:
        """Initialize the Ollama client.

        Args:
            config: Backend configuration. Uses defaults if not provided.
        """
        self.config = config or BackendConfig()

    def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full prompt text.

        Returns:
            The model output with surrounding whitespace stripped.

        Raises:
            BackendError: On timeout, non-zero exit or empty output after
                all retries, or immediately if the executable is missing.
        """
        return _with_retry(
            lambda: self._run_once(prompt),
            self.config.retry_max_attempts,
            self.config.retry_base_delay,
            f"{self.config.command} run {self.config.model}",
        )

    def _run_once(self, prompt: str) -> str:
        command = [self.config.command, "run", self.config.model, prompt]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.config.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as e:
            raise BackendError(
                f"Backend executable not found: {self.config.command}",
                retryable=False,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise BackendError(
                f"timed out after {self.config.timeout_seconds:g} seconds"
            ) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise BackendError(f"exited with status {result.returncode}: {stderr}")

        output = (result.stdout or "").strip()
        if not output:
            raise BackendError("returned empty output")

        logger.debug("Backend returned %d characters", len(output))
        return output


class AnthropicClient:
    """Client for the Anthropic Messages API with retries.

    Rate-limit and server errors are retried with exponential backoff;
    other API errors fail immediately.
    """

    def __init__(self, config: Optional[BackendConfig] = None) -> None:
        """Initialize the Anthropic client.

        Args:
            config: Backend configuration. Uses defaults if not provided.
        """
        self.config = config or BackendConfig(
            provider="anthropic", model="claude-sonnet-4-20250514"
        )
        self._api_key = os.getenv("ANTHROPIC_API_KEY", "")
        self._client: Optional[anthropic.Anthropic] = None

    @property
    def client(self) -> anthropic.Anthropic:
        """Lazily initialize the Anthropic client.

        Raises:
            BackendError: If ANTHROPIC_API_KEY is not set.
        """
        if self._client is None:
            if not self._api_key:
                raise BackendError(
                    "ANTHROPIC_API_KEY environment variable is not set. "
                    "Set it before making API calls.",
                    retryable=False,
                )
            self._client = anthropic.Anthropic(
                api_key=self._api_key, timeout=self.config.timeout_seconds
            )
        return self._client

    def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full prompt text.

        Returns:
            The response text with surrounding whitespace stripped.

        Raises:
            BackendError: If the API call fails after all retries or the
                response is empty.
        """
        return _with_retry(
            lambda: self._create_once(prompt),
            self.config.retry_max_attempts,
            self.config.retry_base_delay,
            f"Anthropic {self.config.model}",
        )

    def _create_once(self, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (anthropic.RateLimitError, anthropic.APIConnectionError) as e:
            raise BackendError(str(e)) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise BackendError(f"server error {e.status_code}") from e
            raise BackendError(
                f"API error {e.status_code}: {e.message}", retryable=False
            ) from e

        content = ""
        if response.content:
            content = getattr(response.content[0], "text", "") or ""
        content = content.strip()
        if not content:
            raise BackendError("returned empty content")

        logger.info(
            "Generated %d tokens (input: %d, output: %d)",
            response.usage.input_tokens + response.usage.output_tokens,
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        return content


def create_client(config: BackendConfig) -> CompletionClient:
    """Create the completion client selected by the configuration.

    Args:
        config: Backend configuration.

    Returns:
        An OllamaClient or AnthropicClient.

    Raises:
        ValueError: If the provider is unknown.
    """
    if config.provider == "ollama":
        return OllamaClient(config)
    if config.provider == "anthropic":
        return AnthropicClient(config)
    raise ValueError(f"Unknown backend provider: {config.provider}")
