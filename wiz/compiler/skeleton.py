"""Skeleton Generator — maps a ParsedIntent to a four-node workflow template.

Node order is fixed: input, actor placeholder, aggregator, output. The
placeholder is replaced by concrete actors in ``wiz.compiler.assembler``.
"""

import hashlib
import json
import math
from dataclasses import dataclass, field

from wiz.state import BATCH_SIZE, ParsedIntent, SkeletonNode, WorkflowSkeleton

PLACEHOLDER_TYPE = "_placeholder"

# Node types the assembler treats as anchors when wiring fan-out / fan-in.
INPUT_NODE_TYPES = frozenset({"dataNode", "contentUrlInputNode"})
AGGREGATOR_NODE_TYPES = frozenset({"analysisNode"})
OUTPUT_NODE_TYPES = frozenset({"outputNode"})


def _data_input(label: str, sub_type: str, description: str) -> SkeletonNode:
    return {
        "type": "dataNode",
        "label": label,
        "payload": {"label": label, "subType": sub_type, "description": description},
    }


def _url_input(label: str, description: str) -> SkeletonNode:
    return {
        "type": "contentUrlInputNode",
        "label": label,
        "payload": {"label": label, "description": description},
    }


INPUT_TEMPLATES: dict[str, SkeletonNode] = {
    "test": _data_input("Test Questions", "file", "Upload test/exam questions"),
    "video": _url_input("Video Content", "Paste video URL"),
    "article": _url_input("Article", "Paste article URL"),
    "document": _data_input("Document", "file", "Upload document for review"),
    "food": _data_input("Recipe / Dish", "text", "Enter recipe or dish details"),
    "product": _data_input("Product Details", "text", "Enter product information"),
    "data": _data_input("Data Input", "file", "Upload your data"),
    "custom": _data_input("Input", "text", "Enter your input data"),
}

AGGREGATOR_LABELS: dict[str, str] = {
    "average": "Score Calculator",
    "sentiment": "Sentiment Aggregator",
    "consensus": "Consensus Builder",
    "grades": "Grade Calculator",
    "best-of": "Best-of Selector",
    "majority": "Vote Tally",
    "synthesis": "Argument Synthesizer",
}

# Formatted with count and plural noun.
AGGREGATOR_DESCRIPTIONS: dict[str, str] = {
    "average": "Calculates average scores from all {count} {plural}",
    "sentiment": "Analyzes sentiment patterns from all {count} {plural}",
    "consensus": "Identifies common conclusions from all {count} {plural}",
    "grades": "Computes grades/scores from all {count} {plural}",
    "best-of": "Selects top outputs from all {count} {plural}",
    "majority": "Tallies votes from all {count} {plural}",
    "synthesis": "Synthesizes perspectives from all {count} {plural}",
}

OUTPUT_LABELS: dict[str, str] = {
    "scores": "Score Report",
    "reactions": "Reaction Summary",
    "analysis": "Analysis Report",
    "grades": "Grade Report",
    "selections": "Top Selections",
    "consensus": "Final Decision",
    "summary": "Summary Report",
}


@dataclass(frozen=True)
class SkeletonTemplates:
    """The four lookup tables used to build a skeleton. Swap for alternate templates."""

    inputs: dict[str, SkeletonNode] = field(default_factory=lambda: INPUT_TEMPLATES)
    aggregator_labels: dict[str, str] = field(default_factory=lambda: AGGREGATOR_LABELS)
    aggregator_descriptions: dict[str, str] = field(default_factory=lambda: AGGREGATOR_DESCRIPTIONS)
    output_labels: dict[str, str] = field(default_factory=lambda: OUTPUT_LABELS)


DEFAULT_TEMPLATES = SkeletonTemplates()


def estimate_batches(agent_count: int, batch_size: int = BATCH_SIZE) -> int:
    return math.ceil(agent_count / batch_size)


def _input_node(input_type: str, templates: SkeletonTemplates) -> SkeletonNode:
    template = templates.inputs.get(input_type) or templates.inputs["custom"]
    return {
        "type": template["type"],
        "label": template["label"],
        "payload": dict(template["payload"]),
    }


def _placeholder_node(intent: ParsedIntent) -> SkeletonNode:
    return {
        "type": PLACEHOLDER_TYPE,
        "label": f"{intent['agentCount']} {intent['agentNounPlural']}",
        "payload": {
            "agentCount": intent["agentCount"],
            "agentNoun": intent["agentNoun"],
            "agentNounPlural": intent["agentNounPlural"],
            "namingStyle": intent["namingStyle"],
            "taskType": intent["taskType"],
            "taskVerb": intent["taskVerb"],
            "demographicMix": intent.get("demographicMix"),
        },
    }


def _aggregator_node(intent: ParsedIntent, templates: SkeletonTemplates) -> SkeletonNode:
    aggregation = intent["aggregationType"]
    if aggregation not in templates.aggregator_labels:
        aggregation = "synthesis"
    label = templates.aggregator_labels[aggregation]
    description = templates.aggregator_descriptions[aggregation].format(
        count=intent["agentCount"], plural=intent["agentNounPlural"]
    )
    return {
        "type": "analysisNode",
        "label": label,
        "payload": {
            "label": label,
            "analysisType": "aggregation",
            "aggregationType": aggregation,
            "description": description,
        },
    }


def _output_node(intent: ParsedIntent, templates: SkeletonTemplates) -> SkeletonNode:
    output_type = intent["outputType"]
    if output_type not in templates.output_labels:
        output_type = "summary"
    label = templates.output_labels[output_type]
    return {
        "type": "outputNode",
        "label": label,
        "payload": {"label": label, "outputType": output_type},
    }


def generate_workflow_name(intent: ParsedIntent) -> str:
    noun_label = intent["agentNoun"][:1].upper() + intent["agentNoun"][1:]
    verb_label = intent["taskVerb"][:1].upper() + intent["taskVerb"][1:]
    count = intent["agentCount"]

    if intent["taskType"] == "testing" and intent["inputType"] == "test":
        return f"{count} {noun_label}s Test Simulation"
    if intent["taskType"] == "reaction" and intent["inputType"] == "video":
        return f"{count} {noun_label}s Video Reaction"
    if intent["taskType"] == "rating":
        return f"{count} {noun_label}s {verb_label} Session"
    return f"{count} {noun_label}s {verb_label} Workflow"


def _skeleton_id(intent: ParsedIntent) -> str:
    digest = hashlib.sha1(json.dumps(intent, sort_keys=True).encode("utf-8")).hexdigest()[:10]
    slug = "-".join(intent["agentNoun"].split())
    return f"{slug}-{intent['taskType']}-workflow-{digest}"


def build_skeleton(intent: ParsedIntent, templates: SkeletonTemplates | None = None) -> WorkflowSkeleton:
    """Build the input -> placeholder -> aggregator -> output skeleton.

    Always four nodes and three connections. Pure: identical intents give
    identical skeletons, including the id.
    """
    templates = templates or DEFAULT_TEMPLATES

    nodes = [
        _input_node(intent["inputType"], templates),
        _placeholder_node(intent),
        _aggregator_node(intent, templates),
        _output_node(intent, templates),
    ]
    input_index, placeholder_index, aggregator_index, output_index = range(4)

    return {
        "id": _skeleton_id(intent),
        "name": generate_workflow_name(intent),
        "description": f"{intent['agentCount']} {intent['agentNounPlural']}: {intent['taskDescription']}",
        "category": "analysis",
        "nodes": nodes,
        "connections": [
            {"from": input_index, "to": placeholder_index},
            {"from": placeholder_index, "to": aggregator_index},
            {"from": aggregator_index, "to": output_index},
        ],
    }
