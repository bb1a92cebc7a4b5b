"""Tests for graph assembly: placeholder removal, fan-out/fan-in wiring and purity."""

import copy

from conftest import make_actor

from wiz.compiler.assembler import actor_to_node, assemble
from wiz.compiler.skeleton import PLACEHOLDER_TYPE
from wiz.utils.graph_check import check_graph


def _actors(n):
    return [make_actor(i) for i in range(n)]


class TestAssemble:
    def test_node_and_connection_counts(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(5))
        # 3 anchors + 5 actors; 5 fan-out + 5 fan-in + aggregator -> output
        assert len(suggestion["nodes"]) == 8
        assert len(suggestion["connections"]) == 2 * 5 + 1

    def test_no_placeholder_survives(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(3))
        assert PLACEHOLDER_TYPE not in [n["type"] for n in suggestion["nodes"]]

    def test_wiring(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(2))
        # nodes: 0 input, 1 aggregator, 2 output, 3-4 actors
        assert suggestion["connections"] == [
            {"from": 0, "to": 3},
            {"from": 0, "to": 4},
            {"from": 3, "to": 1},
            {"from": 4, "to": 1},
            {"from": 1, "to": 2},
        ]

    def test_every_index_valid(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(57))
        assert check_graph(suggestion) == []

    def test_actor_order_preserved(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(4))
        labels = [n["label"] for n in suggestion["nodes"][3:]]
        assert labels == [f"Chef {i + 1} - Person{i}" for i in range(4)]

    def test_zero_actors_leaves_aggregator_to_output(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, [])
        assert len(suggestion["nodes"]) == 3
        assert suggestion["connections"] == [{"from": 1, "to": 2}]

    def test_missing_input_anchor_skips_fan_out(self, chefs_intent, chefs_skeleton):
        chefs_skeleton["nodes"][0]["type"] = "mysteryNode"
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(2))
        assert {"from": 0, "to": 3} not in suggestion["connections"]
        assert len(suggestion["connections"]) == 3

    def test_missing_aggregator_skips_fan_in_and_output_edge(self, chefs_intent, chefs_skeleton):
        del chefs_skeleton["nodes"][2]
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(2))
        # nodes: 0 input, 1 output, 2-3 actors; only fan-out remains
        assert suggestion["connections"] == [{"from": 0, "to": 2}, {"from": 0, "to": 3}]

    def test_carries_skeleton_metadata(self, chefs_intent, chefs_skeleton):
        suggestion = assemble(chefs_intent, chefs_skeleton, _actors(1))
        assert suggestion["id"] == chefs_skeleton["id"]
        assert suggestion["name"] == chefs_skeleton["name"]
        assert suggestion["category"] == "analysis"

    def test_inputs_not_mutated(self, chefs_intent, chefs_skeleton):
        actors = _actors(3)
        skeleton_before = copy.deepcopy(chefs_skeleton)
        actors_before = copy.deepcopy(actors)

        suggestion = assemble(chefs_intent, chefs_skeleton, actors)
        suggestion["nodes"][0]["payload"]["label"] = "changed"

        assert chefs_skeleton == skeleton_before
        assert actors == actors_before


class TestActorToNode:
    def test_flat_persona_payload(self):
        node = actor_to_node(make_actor(0))
        payload = node["payload"]

        assert node["type"] == "brainNode"
        assert payload["personaName"] == "Person0"
        assert payload["personaAge"] == 30
        assert payload["personaAgeGroup"] == "Millennial"
        assert payload["personaTraits"] == ["thorough", "curious"]
        assert payload["personaBackground"] == "western"
        assert payload["personaPersonality"] == "analytical"
        assert payload["behavior"].startswith("Person0 will")
        assert "specialization" not in payload
        assert "title" not in payload

    def test_professional_extras(self):
        actor = make_actor(0, noun="scientist")
        actor["persona"]["specialization"] = "Physics"
        actor["persona"]["title"] = "Dr."

        payload = actor_to_node(actor)["payload"]
        assert payload["specialization"] == "Physics"
        assert payload["title"] == "Dr."
