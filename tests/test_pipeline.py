"""End-to-end tests for the documentation pipeline."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.errors import BackendError
from src.pipeline import DocumentationPipeline
from src.utils.config import AppConfig

from tests.samples import BROKEN_PHP, EchoClient


class TestRun:
    """Tests for DocumentationPipeline.run."""

    def test_single_class_document(
        self, app_config: AppConfig, echo_client: EchoClient
    ) -> None:
        result = DocumentationPipeline(app_config, client=echo_client).run()

        content = Path(app_config.output.path).read_text(encoding="utf-8")
        assert content == result.assembly.content
        assert content.startswith("## Introduction")
        assert "# YourPackage Documentation" in content
        assert content.count("## Class `Foo`") == 1
        assert content.count("### Method `bar()`") == 1
        assert content.count("### Method `baz()`") == 1
        assert content.index("## Class `Foo`") < content.index("### Method `bar()`")

        class_prompt, bar_prompt, _ = echo_client.prompts
        assert "namespace App\\Models;" in class_prompt
        assert "/** Foo class */" in class_prompt
        assert "/** does bar */" in bar_prompt
        assert "return 1;" not in bar_prompt

    def test_empty_source_dir(
        self, tmp_path: Path, app_config: AppConfig, echo_client: EchoClient
    ) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        app_config.source.root_dir = str(empty)

        result = DocumentationPipeline(app_config, client=echo_client).run()

        content = Path(app_config.output.path).read_text(encoding="utf-8")
        assert result.files == []
        assert echo_client.prompts == []
        assert "## Introduction" in content
        assert "## Table of Contents" in content
        assert "## Class `" not in content
        assert "### Method `" not in content

    def test_broken_file_is_skipped(
        self,
        app_config: AppConfig,
        source_tree: Path,
        echo_client: EchoClient,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        (source_tree / "Broken.php").write_text(BROKEN_PHP)

        with caplog.at_level(logging.INFO):
            result = DocumentationPipeline(app_config, client=echo_client).run()

        assert len(result.files) == 2
        assert [c.name for c in result.classes] == ["Foo"]
        content = result.output_path.read_text(encoding="utf-8")
        assert content.count("## Class `") == 1
        assert "Broken" not in content
        assert "Parse error in file" in caplog.text

    def test_nested_directories_scanned(
        self, app_config: AppConfig, source_tree: Path, echo_client: EchoClient
    ) -> None:
        nested = source_tree / "Models"
        nested.mkdir()
        (nested / "User.php").write_text("<?php\nclass User {}\n")
        (source_tree / "Api.php").write_text("<?php\nclass Api {}\n")

        result = DocumentationPipeline(app_config, client=echo_client).run()

        names = [c.name for c in result.classes]
        assert sorted(names) == ["Api", "Foo", "User"]
        content = result.output_path.read_text(encoding="utf-8")
        for name in names:
            assert f"## Class `{name}`" in content

    def test_output_overwritten(
        self, app_config: AppConfig, echo_client: EchoClient
    ) -> None:
        Path(app_config.output.path).write_text("## Class `Stale`\n")
        DocumentationPipeline(app_config, client=echo_client).run()
        assert "Stale" not in Path(app_config.output.path).read_text(encoding="utf-8")

    def test_failures_reported(
        self, app_config: AppConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = MagicMock()
        client.complete.side_effect = BackendError("timed out after 600 seconds")

        with caplog.at_level(logging.WARNING):
            result = DocumentationPipeline(app_config, client=client).run()

        assert len(result.assembly.failures) == 3
        assert result.output_path.exists()
        assert "3 sections could not be generated" in caplog.text

    def test_fail_fast_writes_nothing(self, app_config: AppConfig) -> None:
        app_config.backend.fail_fast = True
        client = MagicMock()
        client.complete.side_effect = BackendError("boom")

        with pytest.raises(BackendError):
            DocumentationPipeline(app_config, client=client).run()
        assert not Path(app_config.output.path).exists()


class TestDryRun:
    """Tests for dry runs."""

    @patch("src.pipeline.create_client")
    def test_no_backend_and_no_write(
        self, mock_create: MagicMock, app_config: AppConfig
    ) -> None:
        result = DocumentationPipeline(app_config).run(dry_run=True)

        mock_create.assert_not_called()
        assert [c.name for c in result.classes] == ["Foo"]
        assert result.assembly is None
        assert result.output_path is None
        assert not Path(app_config.output.path).exists()


class TestClientCreation:
    """Tests for lazy client creation."""

    @patch("src.pipeline.create_client")
    def test_client_built_from_backend_config(
        self, mock_create: MagicMock, app_config: AppConfig
    ) -> None:
        mock_create.return_value = EchoClient()
        pipeline = DocumentationPipeline(app_config)

        assert pipeline.client is mock_create.return_value
        assert pipeline.client is mock_create.return_value
        mock_create.assert_called_once_with(app_config.backend)
