"""
Tests for mocker/host/bridge.py
"""

from __future__ import annotations

import json
import logging

from mocker.host.bridge import DocumentBridge, component_name_for, header_memos
from mocker.host.models import EditorSavePayload, ViewportSetting
from mocker.kernel.parser import parse_moc_file
from mocker.kernel.serializer import serialize_moc_file
from mocker.kernel.templates import get_template_content
from mocker.kernel.types import EditorMemo, MocDocument, MocEditorData, MocMetadata

CRAFT_STATE = {
    "ROOT": {
        "type": {"resolvedName": "CraftContainer"},
        "props": {},
        "nodes": ["btn"],
        "linkedNodes": {},
        "parent": None,
    },
    "btn": {
        "type": {"resolvedName": "CraftButton"},
        "props": {"text": "Log in"},
        "nodes": [],
        "linkedNodes": {},
        "parent": "ROOT",
    },
}


def make_save_payload(**overrides):
    payload = {
        "craftState": CRAFT_STATE,
        "memos": [
            {
                "id": "m1",
                "title": "Wording",
                "body": "Say Sign in",
                "color": "green",
                "collapsed": False,
                "x": 10,
                "y": 20,
                "targetNodeId": "btn",
                "pinned": True,
            },
            {"id": "m2", "title": "", "body": "Loose note", "x": 0, "y": 0},
        ],
        "viewport": {"mode": "custom", "width": 800, "height": 600},
    }
    payload.update(overrides)
    return json.dumps(payload)


class TestLoad:
    def test_template_without_editor_data(self):
        bridge = DocumentBridge()
        assert bridge.file_to_editor_json("a.moc", get_template_content("login-form", "Login")) is None

    def test_metadata_cached_even_without_editor_data(self):
        bridge = DocumentBridge()
        bridge.file_to_editor_json("a.moc", get_template_content("login-form", "Login"))
        assert bridge.metadata_for("a.moc").intent == "Login form mockup"

    def test_editor_json_shape(self):
        bridge = DocumentBridge()
        text = bridge.editor_json_to_file("a.moc", make_save_payload(), "a.moc")
        loaded = json.loads(DocumentBridge().file_to_editor_json("b.moc", text))
        assert loaded["version"] == 1
        assert loaded["craftState"] == CRAFT_STATE
        assert loaded["viewport"] == {"mode": "custom", "width": 800, "height": 600}
        assert loaded["memos"][0]["targetNodeId"] == "btn"
        assert loaded["memos"][0]["pinned"] is True

    def test_viewport_falls_back_to_metadata(self):
        doc = MocDocument(
            metadata=MocMetadata(viewport="1024x768"),
            editor_data=MocEditorData(craft_state=CRAFT_STATE),
        )
        loaded = json.loads(DocumentBridge().file_to_editor_json("a.moc", serialize_moc_file(doc)))
        assert loaded["viewport"] == {"mode": "custom", "width": 1024, "height": 768}

    def test_preset_viewport_not_converted(self):
        doc = MocDocument(
            metadata=MocMetadata(viewport="tablet"),
            editor_data=MocEditorData(craft_state=CRAFT_STATE),
        )
        loaded = json.loads(DocumentBridge().file_to_editor_json("a.moc", serialize_moc_file(doc)))
        assert "viewport" not in loaded


class TestSave:
    def test_component_name_from_file(self):
        text = DocumentBridge().editor_json_to_file("k", make_save_payload(), "/work/mocks/LoginForm.moc")
        assert "export default function LoginForm()" in text

    def test_compiled_body_and_imports(self):
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", make_save_payload(), "Login.moc"))
        assert 'import { Button } from "@/components/ui/button";' in doc.imports
        assert "<Button>Log in</Button>" in doc.tsx_source
        assert '{/* @moc-memo "Wording: Say Sign in" */}' in doc.tsx_source

    def test_header_memos_only_for_targeted_notes(self):
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", make_save_payload(), "Login.moc"))
        assert [(m.target_id, m.text) for m in doc.metadata.memos] == [("btn", "Wording: Say Sign in")]

    def test_custom_viewport_label(self):
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", make_save_payload(), "Login.moc"))
        assert doc.metadata.viewport == "800x600"

    def test_preset_viewport_label(self):
        payload = make_save_payload(viewport={"mode": "mobile"})
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", payload, "Login.moc"))
        assert doc.metadata.viewport == "mobile"

    def test_cached_metadata_preserved(self):
        bridge = DocumentBridge()
        bridge.file_to_editor_json("login", get_template_content("login-form", "Login"))
        doc = parse_moc_file(bridge.editor_json_to_file("login", make_save_payload(), "Login.moc"))
        assert doc.metadata.intent == "Login form mockup"

    def test_editor_data_round_trip(self):
        bridge = DocumentBridge()
        text = bridge.editor_json_to_file("k", make_save_payload(), "Login.moc")
        doc = parse_moc_file(text)
        assert doc.editor_data.craft_state == CRAFT_STATE
        assert doc.editor_data.memos[0].extra == {"pinned": True}
        assert doc.editor_data.memos[1].target_node_id is None

    def test_save_load_save_is_stable(self):
        first = DocumentBridge().editor_json_to_file("k", make_save_payload(), "Login.moc")
        bridge = DocumentBridge()
        loaded = bridge.file_to_editor_json("k", first)
        second = bridge.editor_json_to_file("k", loaded, "Login.moc")
        assert second == first

    def test_invalid_json_returned_unchanged(self, caplog):
        bridge = DocumentBridge()
        with caplog.at_level(logging.WARNING, logger="mocker.host.bridge"):
            result = bridge.editor_json_to_file("k", "{not json", "Login.moc")
        assert result == "{not json"
        assert "Rejected editor payload" in caplog.text

    def test_invalid_shape_returned_unchanged(self):
        payload = json.dumps({"craftState": [], "memos": []})
        assert DocumentBridge().editor_json_to_file("k", payload, "Login.moc") == payload

    def test_empty_craft_state_gives_stub(self):
        payload = make_save_payload(craftState={}, memos=[])
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", payload, "Empty.moc"))
        assert doc.tsx_source == "export default function Empty() {\n  return <div />;\n}"

    def test_null_craft_state_gives_stub(self):
        payload = make_save_payload(craftState=None, memos=None)
        doc = parse_moc_file(DocumentBridge().editor_json_to_file("k", payload, "Empty.moc"))
        assert doc.tsx_source == "export default function Empty() {\n  return <div />;\n}"
        assert doc.editor_data.craft_state == {}
        assert doc.editor_data.memos == []


class TestDocumentKeys:
    def test_documents_do_not_share_metadata(self):
        bridge = DocumentBridge()
        bridge.file_to_editor_json("login", get_template_content("login-form", "Login"))
        bridge.file_to_editor_json("dash", get_template_content("dashboard", "Dash"))
        login = parse_moc_file(bridge.editor_json_to_file("login", make_save_payload(), "Login.moc"))
        dash = parse_moc_file(bridge.editor_json_to_file("dash", make_save_payload(), "Dash.moc"))
        assert login.metadata.intent == "Login form mockup"
        assert dash.metadata.intent == "Dashboard layout mockup"

    def test_forget(self):
        bridge = DocumentBridge()
        bridge.file_to_editor_json("login", get_template_content("login-form", "Login"))
        bridge.forget("login")
        assert bridge.metadata_for("login") is None
        doc = parse_moc_file(bridge.editor_json_to_file("login", make_save_payload(), "Login.moc"))
        assert doc.metadata.intent == ""

    def test_forget_unknown_key(self):
        DocumentBridge().forget("never-opened")


class TestHelpers:
    def test_component_name_for(self):
        assert component_name_for("/a/b/Checkout.moc") == "Checkout"
        assert component_name_for("C:\\mocks\\Settings.moc") == "Settings"
        assert component_name_for("Plain") == "Plain"

    def test_component_name_fallback(self):
        assert component_name_for("") == "MockPage"
        assert component_name_for(".moc") == "MockPage"

    def test_header_memos(self):
        memos = [
            EditorMemo(id="1", title="T", target_node_id="a"),
            EditorMemo(id="2", body="B", target_node_id="b"),
            EditorMemo(id="3", target_node_id="c"),
            EditorMemo(id="4", title="Loose"),
        ]
        assert [(m.target_id, m.text) for m in header_memos(memos)] == [("a", "T"), ("b", "B")]


class TestModels:
    def test_viewport_label(self):
        assert ViewportSetting(mode="tablet").label == "tablet"
        assert ViewportSetting(mode="custom", width=320, height=640).label == "320x640"

    def test_save_payload_aliases(self):
        payload = EditorSavePayload.model_validate_json(make_save_payload())
        assert payload.craft_state == CRAFT_STATE
        assert payload.memos[0].target_node_id == "btn"
        assert payload.memos[0].model_dump(by_alias=True)["pinned"] is True

    def test_integer_coordinates_stay_integers(self):
        payload = EditorSavePayload.model_validate_json(make_save_payload())
        assert isinstance(payload.memos[0].x, int)

    def test_numeric_memo_id_kept_as_text(self):
        payload = json.loads(make_save_payload())
        payload["memos"][0]["id"] = 7
        parsed = EditorSavePayload.model_validate(payload)
        assert parsed.memos[0].id == "7"
