"""Output Formatter — writes the final suggestion as JSON plus a Markdown summary."""

import json
import re
from collections import Counter
from pathlib import Path

from wiz.config import get_config
from wiz.state import ParsedIntent, WizardSuggestion

# Cap on actor rows in the Markdown table; the JSON always carries all of them.
MAX_ACTOR_ROWS = 50


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def render_markdown(suggestion: WizardSuggestion, intent: ParsedIntent | None = None) -> str:
    """Convert a WizardSuggestion into a readable Markdown summary."""
    lines = []

    name = suggestion.get("name", "Untitled Workflow")
    lines.append(f"# {name}")
    lines.append("")

    description = suggestion.get("description", "")
    if description:
        lines.append(description)
        lines.append("")

    # Intent
    if intent:
        lines.append("## Request")
        lines.append("")
        lines.append(f"- **Actors:** {intent['agentCount']} {intent['agentNounPlural']}")
        lines.append(f"- **Naming style:** {intent['namingStyle']}")
        lines.append(f"- **Task:** {intent['taskType']} ({intent['taskVerb']})")
        lines.append(f"- **Input:** {intent['inputType']}")
        lines.append(f"- **Output:** {intent['outputType']} via {intent['aggregationType']}")
        if intent.get("demographicMix"):
            lines.append(f"- **Demographics:** {', '.join(intent['demographicMix'])}")
        lines.append("")

    nodes = suggestion.get("nodes", [])
    connections = suggestion.get("connections", [])

    # Node overview
    lines.append("## Graph")
    lines.append("")
    lines.append(f"{len(nodes)} nodes, {len(connections)} connections.")
    lines.append("")
    lines.append("| Type | Count |")
    lines.append("|------|-------|")
    for node_type, count in Counter(n.get("type", "") for n in nodes).items():
        lines.append(f"| `{node_type}` | {count} |")
    lines.append("")

    # Actors
    actors = [n for n in nodes if "personaName" in n.get("payload", {})]
    if actors:
        lines.append("## Actors")
        lines.append("")
        lines.append("| Label | Age | Group | Personality | Traits |")
        lines.append("|-------|-----|-------|-------------|--------|")
        for node in actors[:MAX_ACTOR_ROWS]:
            payload = node["payload"]
            traits = ", ".join(payload.get("personaTraits", []))
            lines.append(
                f"| {node.get('label', '')} | {payload.get('personaAge', '')} | "
                f"{payload.get('personaAgeGroup', '')} | {payload.get('personaPersonality', '')} | {traits} |"
            )
        if len(actors) > MAX_ACTOR_ROWS:
            lines.append("")
            lines.append(f"*… and {len(actors) - MAX_ACTOR_ROWS} more.*")
        lines.append("")

    # Non-actor nodes
    others = [n for n in nodes if "personaName" not in n.get("payload", {})]
    if others:
        lines.append("## Pipeline Nodes")
        lines.append("")
        for node in others:
            node_description = node.get("payload", {}).get("description", "")
            suffix = f" — {node_description}" if node_description else ""
            lines.append(f"- **{node.get('label', '')}** (`{node.get('type', '')}`){suffix}")
        lines.append("")

    return "\n".join(lines)


def write_workflow(
    suggestion: WizardSuggestion,
    intent: ParsedIntent | None = None,
    output_path: str | Path | None = None,
) -> Path:
    """Write the suggestion JSON and its Markdown summary next to it.

    Never overwrites: a numbered suffix is added when the name is taken.
    Returns the Path to the written JSON file.
    """
    if output_path is None:
        config = get_config()
        base_path = Path(__file__).resolve().parent.parent.parent / config["output_path"]
    else:
        base_path = Path(output_path)
    output_dir = base_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = _slug(suggestion.get("name", "")) or base_path.stem

    # Find a non-conflicting filename
    json_path = output_dir / f"{stem}.json"
    counter = 1
    while json_path.exists():
        counter += 1
        json_path = output_dir / f"{stem} ({counter}).json"

    json_path.write_text(json.dumps(suggestion, indent=2), encoding="utf-8")
    json_path.with_suffix(".md").write_text(render_markdown(suggestion, intent), encoding="utf-8")
    return json_path
