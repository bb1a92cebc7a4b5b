"""Tests for the CLI entry point: run() against the local service, argument handling in main()."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from wiz import main as cli
from wiz.services.http import HttpWizardService
from wiz.services.local import LocalWizardService


class TestRun:
    @pytest.mark.asyncio
    @patch("wiz.main.LocalWizardService")
    async def test_writes_workflow(self, MockService, tmp_path, capsys):
        MockService.return_value = LocalWizardService(seed=1)

        suggestion = await cli.run("30 chefs rating a recipe", output_path=str(tmp_path / "workflow.json"))

        written = json.loads((tmp_path / "30-chefs-rating-session.json").read_text(encoding="utf-8"))
        assert written == suggestion
        assert len(suggestion["nodes"]) == 33
        out = capsys.readouterr().out
        assert "[WIZ] Batch 2/2" in out
        assert "[WIZ] Nodes: 33, connections: 61" in out

    @pytest.mark.asyncio
    @patch("wiz.main.write_workflow")
    @patch("wiz.main.LocalWizardService")
    async def test_error_not_written(self, MockService, mock_write, capsys):
        service = MockService.return_value
        service.parse_intent = AsyncMock(side_effect=RuntimeError("offline"))

        assert await cli.run("30 chefs rating a recipe") is None

        mock_write.assert_not_called()
        assert "[WIZ] Error: Failed to understand request" in capsys.readouterr().err

    @pytest.mark.asyncio
    @patch.object(HttpWizardService, "generate_workflow", new_callable=AsyncMock)
    async def test_url_selects_http_service(self, mock_generate, mock_config, legacy_suggestion, tmp_path):
        mock_generate.return_value = legacy_suggestion

        await cli.run("analyze brain scans", url="http://wizard.test", output_path=str(tmp_path / "w.json"))

        mock_generate.assert_awaited_once_with("analyze brain scans")
        assert (tmp_path / "brain-scan-review.json").exists()

    @pytest.mark.asyncio
    async def test_empty_query_raises(self):
        with pytest.raises(ValueError):
            await cli.run("  ")


class TestMain:
    @patch("wiz.main.configure_logging")
    @patch("wiz.main.run", new_callable=AsyncMock)
    def test_flags_and_query(self, mock_run, _log, legacy_suggestion):
        mock_run.return_value = legacy_suggestion
        argv = ["wiz", "--url", "http://wizard.test", "57", "chefs", "--output", "out/w.json", "rating"]
        with patch("sys.argv", argv):
            cli.main()

        mock_run.assert_awaited_once_with(
            "57 chefs rating", url="http://wizard.test", output_path="out/w.json"
        )

    @patch("wiz.main.configure_logging")
    @patch("wiz.main.run", new_callable=AsyncMock)
    def test_exit_code_when_nothing_produced(self, mock_run, _log):
        mock_run.return_value = None
        with patch("sys.argv", ["wiz", "analyze brain scans"]):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 1

    def test_flag_without_value(self):
        with patch("sys.argv", ["wiz", "--url"]):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == 2
