"""Shared fixtures for the wizard test suite."""

import asyncio
from unittest.mock import patch

import pytest

from wiz.compiler.skeleton import build_skeleton


def make_actor(index: int, noun: str = "chef") -> dict:
    """A minimal GeneratedActor with a recognisable label."""
    return {
        "type": "brainNode",
        "label": f"{noun.capitalize()} {index + 1} - Person{index}",
        "agentNoun": noun,
        "persona": {
            "name": f"Person{index}",
            "displayName": f"Person{index}",
            "culturalBackground": "western",
            "ageGroup": "Millennial",
            "age": 30,
            "personality": "analytical",
            "traits": ["thorough", "curious"],
        },
        "behavior": f"Person{index} will rate the content.",
    }


class FakeServices:
    """In-memory WizardServices double that records every call.

    ``batch_gate`` (an asyncio.Event) holds each batch request until set,
    letting a test act while a request is in flight.
    """

    def __init__(self, parse_result=None, fail_batch=None, legacy_result=None, parse_error=None):
        self.parse_result = parse_result
        self.parse_error = parse_error
        self.fail_batch = fail_batch  # 0-indexed batch that raises
        self.legacy_result = legacy_result
        self.batch_requests = []
        self.parse_calls = []
        self.legacy_calls = []
        self.batch_gate = None
        self.batch_started = asyncio.Event()

    async def parse_intent(self, query):
        self.parse_calls.append(query)
        if self.parse_error is not None:
            raise self.parse_error
        return self.parse_result

    async def generate_batch(self, request, token=None):
        self.batch_requests.append(dict(request))
        self.batch_started.set()
        if self.batch_gate is not None:
            await self.batch_gate.wait()
        if self.fail_batch == request["batchNumber"]:
            raise RuntimeError(f"Batch {request['batchNumber'] + 1} failed")
        start = request["batchNumber"] * request["batchSize"]
        end = min(start + request["batchSize"], request["totalCount"])
        return [make_actor(i, request["agentNoun"]) for i in range(start, end)]

    async def generate_workflow(self, query):
        self.legacy_calls.append(query)
        if isinstance(self.legacy_result, Exception):
            raise self.legacy_result
        return self.legacy_result


@pytest.fixture
def chefs_intent():
    """ParsedIntent for "57 chefs rating a recipe"."""
    return {
        "workflowType": "parallel-agents",
        "agentCount": 57,
        "agentNoun": "chef",
        "agentNounPlural": "chefs",
        "namingStyle": "casual",
        "taskDescription": "57 chefs rating a recipe",
        "taskVerb": "rating",
        "taskType": "rating",
        "inputType": "food",
        "outputType": "scores",
        "aggregationType": "average",
    }


@pytest.fixture
def chefs_skeleton(chefs_intent):
    return build_skeleton(chefs_intent)


@pytest.fixture
def chefs_parse_result(chefs_intent, chefs_skeleton):
    return {
        "intent": chefs_intent,
        "skeleton": chefs_skeleton,
        "needsBatchGeneration": True,
        "estimatedBatches": 3,
    }


@pytest.fixture
def legacy_suggestion():
    """A small well-formed single-shot workflow."""
    return {
        "id": "brain-scan-review",
        "name": "Brain Scan Review",
        "description": "Review brain scans for anomalies",
        "category": "clinical",
        "nodes": [
            {"type": "dataNode", "label": "Patient Scans", "payload": {"label": "Patient Scans"}},
            {"type": "analysisNode", "label": "Anomaly Detection", "payload": {"label": "Anomaly Detection"}},
            {"type": "outputNode", "label": "Findings Report", "payload": {"label": "Findings Report"}},
        ],
        "connections": [{"from": 0, "to": 1}, {"from": 1, "to": 2}],
    }


@pytest.fixture
def batch_request():
    """BatchRequest for the first batch of 57 casual chefs."""
    return {
        "batchNumber": 0,
        "batchSize": 25,
        "totalCount": 57,
        "agentNoun": "chef",
        "agentNounPlural": "chefs",
        "namingStyle": "casual",
        "taskType": "rating",
        "taskVerb": "rating",
        "taskContext": "57 chefs rating a recipe",
    }


@pytest.fixture
def mock_config(tmp_path):
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "legacy_model": "gemini-2.0-flash",
        "legacy_temperature": 0.7,
        "service_base_url": "http://wizard.test",
        "request_timeout": 5,
        "output_path": str(tmp_path / "output" / "workflow.json"),
        "vocabulary_path": None,
        "log_level": "WARNING",
    }
    with patch("wiz.config._config", test_config):
        yield test_config
