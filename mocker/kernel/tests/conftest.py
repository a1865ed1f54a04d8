"""
Mocker kernel test configuration.

Shared craft-state builders used across the parser, compiler and codec tests.
"""

import pytest


def craft_node(resolved_name, props=None, nodes=None, parent="ROOT", linked_nodes=None):
    return {
        "type": {"resolvedName": resolved_name},
        "props": props or {},
        "nodes": nodes or [],
        "linkedNodes": linked_nodes or {},
        "parent": parent,
    }


@pytest.fixture
def button_state():
    """A row container holding a single default button."""
    return {
        "ROOT": craft_node("CraftContainer", {"display": "flex", "flexDirection": "row"}, ["a"], parent=None),
        "a": craft_node("CraftButton", {"text": "Button"}),
    }
