"""
Mocker Serializer -- Output Shape Tests

Verify the text layout of serialized documents: header preamble, tag order,
memo section, blank-line separation and the trailing editor-data block.
"""

from mocker.kernel.parser import parse_moc_file
from mocker.kernel.serializer import (
    TAG_ORDER,
    escape_memo_text,
    escape_template_body,
    serialize_editor_data,
    serialize_metadata,
    serialize_moc_file,
    update_metadata_field,
)
from mocker.kernel.types import MocDocument, MocEditorData, MocMemo, MocMetadata

# ============================================================================
# Helpers
# ============================================================================


def make_doc(**metadata):
    return MocDocument(
        metadata=MocMetadata(**metadata),
        imports='import { Button } from "@/components/ui/button";',
        tsx_source="export default function Page() {\n  return <Button>Go</Button>;\n}",
    )


# ============================================================================
# Header
# ============================================================================


class TestHeader:
    def test_opens_and_closes_comment(self):
        header = serialize_metadata(MocMetadata())
        assert header.startswith("/**\n")
        assert header.endswith("\n */")

    def test_tags_in_order(self):
        header = serialize_metadata(MocMetadata(intent="Sign in"))
        positions = [header.index(f"@moc-{key} ") for key in TAG_ORDER]
        assert positions == sorted(positions)

    def test_tag_values(self):
        header = serialize_metadata(MocMetadata(intent="Sign in", theme="dark", viewport="800x600"))
        assert " * @moc-version 1.0.0" in header
        assert " * @moc-intent Sign in" in header
        assert " * @moc-theme dark" in header
        assert " * @moc-layout flow" in header
        assert " * @moc-viewport 800x600" in header

    def test_empty_intent_keeps_tag(self):
        header = serialize_metadata(MocMetadata())
        assert "\n * @moc-intent\n" in header

    def test_no_memo_section_without_memos(self):
        header = serialize_metadata(MocMetadata())
        assert "@moc-memo" not in header
        assert header.endswith("@moc-viewport desktop\n */")

    def test_memo_section(self):
        header = serialize_metadata(MocMetadata(memos=[MocMemo("btn", "Make it red")]))
        assert ' * @moc-memo #btn "Make it red"' in header

    def test_id_never_written(self):
        header = serialize_metadata(MocMetadata(id="doc-123"))
        assert "@moc-id" not in header
        assert "doc-123" not in header

    def test_craft_state_marker_written(self):
        header = serialize_metadata(MocMetadata(craft_state="embedded"))
        assert " * @moc-craft-state embedded" in header

    def test_multiline_intent_flattened(self):
        header = serialize_metadata(MocMetadata(intent="line one\nline two"))
        assert " * @moc-intent line one line two" in header

    def test_intent_cannot_close_comment(self):
        doc = parse_moc_file(serialize_moc_file(make_doc(intent="a */ b")))
        assert doc.metadata.intent == "a */ b"
        assert "export default function Page()" in doc.tsx_source

    def test_intent_whitespace_trimmed(self):
        doc = parse_moc_file(serialize_moc_file(make_doc(intent="  padded  ")))
        assert doc.metadata.intent == "padded"

    def test_escaped_comment_close_reads_as_close(self):
        doc = parse_moc_file(serialize_moc_file(make_doc(intent="a *\\/ b")))
        assert doc.metadata.intent == "a */ b"

    def test_preamble_does_not_leak_tags(self):
        doc = parse_moc_file(serialize_moc_file(make_doc()))
        assert doc.metadata.intent == ""
        assert doc.metadata.memos == []


# ============================================================================
# File layout
# ============================================================================


class TestFileLayout:
    def test_single_trailing_newline(self):
        text = serialize_moc_file(make_doc())
        assert text.endswith("}\n")
        assert not text.endswith("\n\n")

    def test_parts_separated_by_blank_line(self):
        text = serialize_moc_file(make_doc())
        assert ' */\n\nimport { Button } from "@/components/ui/button";\n\nexport default' in text

    def test_empty_imports_skipped(self):
        doc = make_doc()
        doc.imports = ""
        text = serialize_moc_file(doc)
        assert " */\n\nexport default function Page()" in text

    def test_editor_data_last(self):
        doc = make_doc()
        doc.editor_data = MocEditorData(craft_state={"ROOT": {"nodes": []}})
        text = serialize_moc_file(doc)
        assert text.rstrip().endswith("`;")
        assert text.index("export default") < text.index("const __MOC_EDITOR_DATA__")

    def test_editor_data_block_format(self):
        block = serialize_editor_data(MocEditorData(craft_state={}, memos=[]))
        assert block == 'const __MOC_EDITOR_DATA__ = `\n{\n  "craftState": {},\n  "memos": []\n}\n`;'

    def test_non_ascii_written_verbatim(self):
        block = serialize_editor_data(MocEditorData(craft_state={"ROOT": {"props": {"text": "ログイン"}}}))
        assert "ログイン" in block


# ============================================================================
# Escaping
# ============================================================================


class TestEscaping:
    def test_template_body(self):
        assert escape_template_body("a`b${c}") == "a\\`b\\${c}"

    def test_dollar_without_brace_untouched(self):
        assert escape_template_body("$5") == "$5"

    def test_memo_text(self):
        assert escape_memo_text('say "hi"') == 'say \\"hi\\"'
        assert escape_memo_text("a\nb") == "a\\nb"
        assert escape_memo_text("a\\b") == "a\\\\b"
        assert escape_memo_text("*/") == "*\\/"


# ============================================================================
# update_metadata_field
# ============================================================================


class TestUpdateMetadataField:
    def test_replaces_existing_tag(self):
        text = serialize_moc_file(make_doc(theme="light"))
        updated = update_metadata_field(text, "theme", "dark")
        assert parse_moc_file(updated).metadata.theme == "dark"
        assert "@moc-theme light" not in updated

    def test_replaces_every_occurrence(self):
        text = "/**\n * @moc-theme light\n * @moc-theme light\n */\n"
        updated = update_metadata_field(text, "theme", "dark")
        assert updated.count("@moc-theme dark") == 2

    def test_inserts_missing_tag(self):
        text = serialize_moc_file(make_doc())
        updated = update_metadata_field(text, "id", "doc-9")
        assert " * @moc-id doc-9\n */" in updated
        assert parse_moc_file(updated).metadata.id == "doc-9"

    def test_rest_of_file_untouched(self):
        text = serialize_moc_file(make_doc())
        updated = update_metadata_field(text, "layout", "absolute")
        assert updated.split(" */", 1)[1] == text.split(" */", 1)[1]

    def test_no_header_unchanged(self):
        text = "export default function X() {}\n"
        assert update_metadata_field(text, "theme", "dark") == text
