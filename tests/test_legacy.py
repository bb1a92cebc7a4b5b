"""Tests for the single-shot legacy generator (LLM mocked)."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from wiz.agents.legacy import SYSTEM_PROMPT, _validate_response, generate_workflow
from wiz.errors import LegacyGenerationError


def _mock_llm(content=None, side_effect=None):
    llm = MagicMock()
    if side_effect is not None:
        llm.ainvoke = AsyncMock(side_effect=side_effect)
    else:
        response = MagicMock()
        response.content = content
        llm.ainvoke = AsyncMock(return_value=response)
    return llm


class TestGenerateWorkflow:
    @pytest.mark.asyncio
    async def test_valid_response(self, mock_config, legacy_suggestion):
        llm = _mock_llm(json.dumps(legacy_suggestion))
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm) as chat:
            result = await generate_workflow("analyze brain scans for tumor detection")

        assert result == legacy_suggestion
        chat.assert_called_once_with(model="gemini-2.0-flash", temperature=0.7)
        llm.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prompt_carries_query(self, mock_config, legacy_suggestion):
        llm = _mock_llm(json.dumps(legacy_suggestion))
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm):
            await generate_workflow("analyze brain scans")

        messages = llm.ainvoke.await_args.args[0]
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1]["content"] == 'User request: "analyze brain scans"'

    @pytest.mark.asyncio
    async def test_fenced_response(self, mock_config, legacy_suggestion):
        llm = _mock_llm(f"```json\n{json.dumps(legacy_suggestion)}\n```")
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm):
            result = await generate_workflow("analyze brain scans")
        assert result["id"] == "brain-scan-review"

    @pytest.mark.asyncio
    async def test_invalid_json(self, mock_config):
        llm = _mock_llm("not json at all")
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm):
            with pytest.raises(LegacyGenerationError):
                await generate_workflow("analyze brain scans")
        assert llm.ainvoke.await_count == 1

    @pytest.mark.asyncio
    async def test_bad_connection_index(self, mock_config, legacy_suggestion):
        legacy_suggestion["connections"].append({"from": 1, "to": 7})
        llm = _mock_llm(json.dumps(legacy_suggestion))
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm):
            with pytest.raises(LegacyGenerationError):
                await generate_workflow("analyze brain scans")

    @pytest.mark.asyncio
    async def test_model_failure(self, mock_config):
        llm = _mock_llm(side_effect=RuntimeError("quota exceeded"))
        with patch("wiz.agents.legacy.ChatGoogleGenerativeAI", return_value=llm):
            with pytest.raises(LegacyGenerationError) as exc_info:
                await generate_workflow("analyze brain scans")
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestValidateResponse:
    def test_missing_required_fields(self, legacy_suggestion):
        del legacy_suggestion["nodes"]
        with pytest.raises(ValueError, match="nodes"):
            _validate_response(legacy_suggestion)

    def test_defaults_label_and_payload(self, legacy_suggestion):
        legacy_suggestion["nodes"][0] = {"type": "dataNode"}
        result = _validate_response(legacy_suggestion)
        assert result["nodes"][0]["label"] == "dataNode"
        assert result["nodes"][0]["payload"] == {"label": "dataNode"}

    def test_unknown_category_becomes_analysis(self, legacy_suggestion):
        legacy_suggestion["category"] = "astrology"
        assert _validate_response(legacy_suggestion)["category"] == "analysis"

    def test_missing_description_defaults_empty(self, legacy_suggestion):
        del legacy_suggestion["description"]
        assert _validate_response(legacy_suggestion)["description"] == ""

    def test_extra_keys_dropped(self, legacy_suggestion):
        legacy_suggestion["reasoning"] = "because"
        assert "reasoning" not in _validate_response(legacy_suggestion)
