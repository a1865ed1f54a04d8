"""
Mocker Compiler -- Determinism, Imports and Tree Safety Tests

This verifies:
  - Same craft state → byte-identical output across repeated compiles
  - Output does not depend on dict ordering of unrelated nodes
  - Import block: one line per module, names sorted and deduplicated,
    modules in first-seen order, linked nodes contribute imports
  - Cycles in the tree raise CraftStateCycleError instead of recursing forever
  - Shared (non-cyclic) subtrees are fine
"""

import pytest

from mocker.kernel.compiler import craft_state_to_tsx
from mocker.kernel.types import CraftStateCycleError, MocError

# ============================================================================
# Helpers
# ============================================================================


def make_node(resolved_name, props=None, nodes=None, parent="ROOT", linked_nodes=None):
    return {
        "type": {"resolvedName": resolved_name},
        "props": props or {},
        "nodes": nodes or [],
        "linkedNodes": linked_nodes or {},
        "parent": parent,
    }


def make_form_state():
    return {
        "ROOT": make_node("CraftContainer", {"gap": "6"}, ["title", "email", "row"], parent=None),
        "title": make_node("CraftText", {"text": "Sign in", "tag": "h1"}),
        "email": make_node("CraftInput", {"type": "email", "placeholder": "you@example.com"}),
        "row": make_node("CraftContainer", {"flexDirection": "row"}, ["cancel", "submit"]),
        "cancel": make_node("CraftButton", {"text": "Cancel", "variant": "outline"}, parent="row"),
        "submit": make_node("CraftButton", {"text": "Sign in"}, parent="row"),
    }


# ============================================================================
# Determinism
# ============================================================================


class TestDeterminism:
    def test_hundred_compiles_identical(self):
        state = make_form_state()
        first = craft_state_to_tsx(state, "SignIn")
        for _ in range(100):
            again = craft_state_to_tsx(state, "SignIn")
            assert again.imports == first.imports
            assert again.tsx_source == first.tsx_source

    def test_node_dict_order_irrelevant(self):
        state = make_form_state()
        reordered = dict(reversed(list(state.items())))
        assert craft_state_to_tsx(reordered) == craft_state_to_tsx(state)

    def test_input_not_mutated(self):
        state = make_form_state()
        snapshot = repr(state)
        craft_state_to_tsx(state)
        assert repr(state) == snapshot


# ============================================================================
# Imports
# ============================================================================


class TestImports:
    def test_modules_in_first_seen_order(self):
        lines = craft_state_to_tsx(make_form_state()).imports.split("\n")
        assert lines == [
            'import { Input } from "@/components/ui/input";',
            'import { Button } from "@/components/ui/button";',
        ]

    def test_names_deduplicated(self):
        state = make_form_state()
        imports = craft_state_to_tsx(state).imports
        assert imports.count("Button") == 1

    def test_names_sorted_within_module(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["b"], parent=None),
            "b": make_node("CraftButton", {"text": "Go", "tooltipText": "Tip"}),
        }
        imports = craft_state_to_tsx(state).imports
        assert 'import { Tooltip, TooltipContent, TooltipProvider, TooltipTrigger } from "@/components/ui/tooltip";' in imports

    def test_linked_nodes_contribute_imports(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["card"], parent=None),
            "card": make_node("CraftCard", {"title": "Plan"}, linked_nodes={"footer": "badge"}),
            "badge": make_node("CraftBadge", {"text": "Pro"}, parent="card"),
        }
        imports = craft_state_to_tsx(state).imports
        assert 'import { Badge } from "@/components/ui/badge";' in imports

    def test_plain_html_needs_no_import(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["t"], parent=None),
            "t": make_node("CraftText", {"text": "Hi"}),
        }
        assert craft_state_to_tsx(state).imports == ""


# ============================================================================
# Tree safety
# ============================================================================


class TestCycles:
    def test_two_node_cycle(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["a"], parent=None),
            "a": make_node("CraftContainer", nodes=["b"]),
            "b": make_node("CraftContainer", nodes=["a"], parent="a"),
        }
        with pytest.raises(CraftStateCycleError) as exc_info:
            craft_state_to_tsx(state)
        assert exc_info.value.node_id == "a"

    def test_root_lists_itself(self):
        state = {"ROOT": make_node("CraftContainer", nodes=["ROOT"], parent=None)}
        with pytest.raises(CraftStateCycleError):
            craft_state_to_tsx(state)

    def test_cycle_through_linked_nodes(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["card"], parent=None),
            "card": make_node("CraftCard", linked_nodes={"body": "card"}),
        }
        with pytest.raises(CraftStateCycleError):
            craft_state_to_tsx(state)

    def test_is_a_moc_error(self):
        assert issubclass(CraftStateCycleError, MocError)

    def test_shared_subtree_is_not_a_cycle(self):
        state = {
            "ROOT": make_node("CraftContainer", nodes=["left", "right"], parent=None),
            "left": make_node("CraftContainer", nodes=["shared"]),
            "right": make_node("CraftContainer", nodes=["shared"]),
            "shared": make_node("CraftText", {"text": "Twice"}),
        }
        tsx = craft_state_to_tsx(state).tsx_source
        assert tsx.count("<p>Twice</p>") == 2
