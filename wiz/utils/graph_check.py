"""Graph check — deterministic structural validation of a WizardSuggestion.

Returns a list of issues. If empty, the suggestion can be placed on a canvas
as-is: every connection points at a real node and no placeholder survived.
"""

from wiz.compiler.skeleton import PLACEHOLDER_TYPE


def check_graph(suggestion: dict) -> list[str]:
    """Check whether the suggestion is a well-formed workflow graph.

    Returns a list of issue strings. Empty list = well-formed.
    """
    if not isinstance(suggestion, dict):
        return ["Suggestion is not an object."]

    issues = []

    # --- Required top-level fields ---
    if not suggestion.get("id"):
        issues.append("Missing id.")
    if not suggestion.get("name"):
        issues.append("Missing name.")

    nodes = suggestion.get("nodes")
    if not isinstance(nodes, list) or not nodes:
        issues.append("Missing or empty nodes.")
        return issues  # Can't check connections without nodes

    for i, node in enumerate(nodes):
        if not isinstance(node, dict) or not node.get("type"):
            issues.append(f"Node {i} has no type.")
        elif node["type"] == PLACEHOLDER_TYPE:
            issues.append(f"Node {i} is an unresolved placeholder.")

    connections = suggestion.get("connections")
    if not isinstance(connections, list):
        issues.append("Missing connections.")
        return issues

    # --- Connection indices must reference existing nodes ---
    for i, conn in enumerate(connections):
        if not isinstance(conn, dict):
            issues.append(f"Connection {i} is not an object.")
            continue
        for end in ("from", "to"):
            index = conn.get(end)
            if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(nodes):
                issues.append(f"Connection {i} has invalid '{end}' index {index!r}.")

    return issues
