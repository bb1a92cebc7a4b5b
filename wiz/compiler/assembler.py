"""Graph Assembler — swaps the skeleton placeholder for concrete actor nodes and wires the graph."""

from typing import Any

from wiz.compiler.skeleton import (
    AGGREGATOR_NODE_TYPES,
    INPUT_NODE_TYPES,
    OUTPUT_NODE_TYPES,
    PLACEHOLDER_TYPE,
)
from wiz.state import Connection, GeneratedActor, ParsedIntent, SkeletonNode, WizardSuggestion, WorkflowSkeleton


def actor_to_node(actor: GeneratedActor) -> SkeletonNode:
    """Flatten an actor's persona into a renderable node payload."""
    persona = actor["persona"]
    payload: dict[str, Any] = {
        "label": actor["label"],
        "agentNoun": actor.get("agentNoun", ""),
        "personaName": persona["displayName"],
        "personaAge": persona["age"],
        "personaAgeGroup": persona["ageGroup"],
        "personaTraits": list(persona["traits"]),
        "personaBackground": persona["culturalBackground"],
        "personaPersonality": persona["personality"],
        "behavior": actor["behavior"],
    }
    if persona.get("specialization"):
        payload["specialization"] = persona["specialization"]
    if persona.get("title"):
        payload["title"] = persona["title"]

    return {"type": actor["type"], "label": actor["label"], "payload": payload}


def assemble(
    intent: ParsedIntent,
    skeleton: WorkflowSkeleton,
    actors: list[GeneratedActor],
) -> WizardSuggestion:
    """Build the final graph from a skeleton and the generated actors.

    Wiring, each only when its anchors exist: input -> every actor,
    every actor -> aggregator, aggregator -> output. With no actors only the
    aggregator -> output edge remains.
    """
    nodes: list[SkeletonNode] = []
    connections: list[Connection] = []

    input_index = aggregator_index = output_index = -1

    for skeleton_node in skeleton["nodes"]:
        if skeleton_node["type"] == PLACEHOLDER_TYPE:
            continue

        node_index = len(nodes)
        nodes.append({
            "type": skeleton_node["type"],
            "label": skeleton_node["label"],
            "payload": dict(skeleton_node["payload"]),
        })

        node_type = skeleton_node["type"]
        if node_type in INPUT_NODE_TYPES:
            input_index = node_index
        elif node_type in AGGREGATOR_NODE_TYPES:
            aggregator_index = node_index
        elif node_type in OUTPUT_NODE_TYPES:
            output_index = node_index

    actor_start = len(nodes)
    nodes.extend(actor_to_node(actor) for actor in actors)
    actor_indices = range(actor_start, actor_start + len(actors))

    if input_index >= 0:
        connections.extend({"from": input_index, "to": i} for i in actor_indices)

    if aggregator_index >= 0:
        connections.extend({"from": i, "to": aggregator_index} for i in actor_indices)

    if aggregator_index >= 0 and output_index >= 0:
        connections.append({"from": aggregator_index, "to": output_index})

    return {
        "id": skeleton["id"],
        "name": skeleton["name"],
        "description": skeleton["description"],
        "category": skeleton.get("category", "analysis"),
        "nodes": nodes,
        "connections": connections,
    }
