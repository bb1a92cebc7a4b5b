"""Tests for the skeleton generator."""

import copy

from wiz.compiler.intent import extract_intent
from wiz.compiler.skeleton import (
    PLACEHOLDER_TYPE,
    SkeletonTemplates,
    build_skeleton,
    estimate_batches,
    generate_workflow_name,
)


class TestBuildSkeleton:
    def test_four_nodes_three_connections(self, chefs_intent):
        skeleton = build_skeleton(chefs_intent)
        assert len(skeleton["nodes"]) == 4
        assert skeleton["connections"] == [
            {"from": 0, "to": 1},
            {"from": 1, "to": 2},
            {"from": 2, "to": 3},
        ]

    def test_node_order(self, chefs_intent):
        types = [n["type"] for n in build_skeleton(chefs_intent)["nodes"]]
        assert types == ["dataNode", PLACEHOLDER_TYPE, "analysisNode", "outputNode"]

    def test_placeholder_payload(self, chefs_intent):
        placeholder = build_skeleton(chefs_intent)["nodes"][1]
        assert placeholder["label"] == "57 chefs"
        assert placeholder["payload"]["agentCount"] == 57
        assert placeholder["payload"]["agentNoun"] == "chef"
        assert placeholder["payload"]["namingStyle"] == "casual"
        assert placeholder["payload"]["taskType"] == "rating"
        assert placeholder["payload"]["demographicMix"] is None

    def test_food_input_template(self, chefs_intent):
        node = build_skeleton(chefs_intent)["nodes"][0]
        assert node["label"] == "Recipe / Dish"
        assert node["payload"]["subType"] == "text"

    def test_aggregator_and_output_from_intent(self, chefs_intent):
        nodes = build_skeleton(chefs_intent)["nodes"]
        assert nodes[2]["label"] == "Score Calculator"
        assert nodes[2]["payload"]["description"] == "Calculates average scores from all 57 chefs"
        assert nodes[3]["label"] == "Score Report"

    def test_video_reaction_scenario(self):
        skeleton = build_skeleton(extract_intent("75 teenagers reacting to a video"))
        input_node, _, aggregator, output = skeleton["nodes"]

        assert input_node["type"] == "contentUrlInputNode"
        assert aggregator["label"] == "Sentiment Aggregator"
        assert aggregator["payload"]["aggregationType"] == "sentiment"
        assert output["label"] == "Reaction Summary"
        assert skeleton["name"] == "75 Teenagers Video Reaction"

    def test_identical_intents_identical_skeletons(self, chefs_intent):
        first = build_skeleton(chefs_intent)
        second = build_skeleton(copy.deepcopy(chefs_intent))
        assert first == second

    def test_id_differs_between_intents(self, chefs_intent):
        other = dict(chefs_intent, agentCount=58)
        assert build_skeleton(chefs_intent)["id"] != build_skeleton(other)["id"]
        assert build_skeleton(chefs_intent)["id"].startswith("chef-rating-workflow-")

    def test_does_not_mutate_templates(self, chefs_intent):
        skeleton = build_skeleton(chefs_intent)
        skeleton["nodes"][0]["payload"]["label"] = "changed"
        assert build_skeleton(chefs_intent)["nodes"][0]["payload"]["label"] == "Recipe / Dish"

    def test_unknown_enum_values_fall_back(self, chefs_intent):
        intent = dict(chefs_intent, inputType="hologram", aggregationType="vibes", outputType="poems")
        nodes = build_skeleton(intent)["nodes"]
        assert nodes[0]["label"] == "Input"
        assert nodes[2]["payload"]["aggregationType"] == "synthesis"
        assert nodes[3]["payload"]["outputType"] == "summary"

    def test_injected_templates(self, chefs_intent):
        templates = SkeletonTemplates(output_labels={"scores": "Leaderboard", "summary": "Summary"})
        assert build_skeleton(chefs_intent, templates)["nodes"][3]["label"] == "Leaderboard"

    def test_category_and_description(self, chefs_intent):
        skeleton = build_skeleton(chefs_intent)
        assert skeleton["category"] == "analysis"
        assert skeleton["description"] == "57 chefs: 57 chefs rating a recipe"


class TestWorkflowName:
    def test_rating_session(self, chefs_intent):
        assert generate_workflow_name(chefs_intent) == "57 Chefs Rating Session"

    def test_test_simulation(self, chefs_intent):
        intent = dict(chefs_intent, taskType="testing", inputType="test", agentNoun="student")
        assert generate_workflow_name(intent) == "57 Students Test Simulation"

    def test_generic_workflow(self, chefs_intent):
        intent = dict(chefs_intent, taskType="debate", taskVerb="debating")
        assert generate_workflow_name(intent) == "57 Chefs Debating Workflow"


class TestEstimateBatches:
    def test_ceiling(self):
        assert estimate_batches(57) == 3
        assert estimate_batches(75) == 3
        assert estimate_batches(25) == 1
        assert estimate_batches(26) == 2

    def test_custom_batch_size(self):
        assert estimate_batches(10, batch_size=3) == 4
