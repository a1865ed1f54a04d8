"""
Mocker Kernel — Document Serializer

Pure function: MocDocument → text. Logical inverse of parse_moc_file.

Layout of the output:
  /** preamble + @moc-* tags + @moc-memo lines */
  imports
  component source
  const __MOC_EDITOR_DATA__ = `...`;   (only when editor data is present)

Only the template-literal encoding is written. The parser still reads the
legacy base64 comment.
"""

from __future__ import annotations

import json
import re

from mocker.kernel.types import EDITOR_DATA_IDENTIFIER, MocDocument, MocEditorData, MocMetadata

# Lines of the fixed documentation preamble. Tag names are written without
# the @ so the parser never reads them as values.
PREAMBLE: tuple[str, ...] = (
    "Mocker Document (.moc)",
    "A GUI mockup definition created with the Mocker visual editor.",
    "Humans, the GUI and AI agents all read and write this one file.",
    "",
    "File structure:",
    "  This file is TSX (TypeScript JSX). Metadata and memos live in this",
    "  JSDoc comment; the editor's internal state lives in the template",
    "  literal variable at the end of the file. The TSX part reads as an",
    "  ordinary React component.",
    "",
    "SSOT (single source of truth):",
    "  When editor data (craftState) is present at the end of the file,",
    "  craftState is authoritative, not the TSX. The TSX is generated from",
    "  craftState. If an AI agent edits the TSX, the GUI editor rebuilds",
    "  craftState from its own data and the edit is overwritten.",
    "",
    "Metadata tags:",
    "  moc-version   document format version (required)",
    "  moc-intent    purpose of this page (optional, written by a human)",
    "  moc-theme     light | dark (optional, default light)",
    "  moc-layout    flow | absolute (optional, default flow)",
    "  moc-viewport  desktop | tablet | mobile | WxH (optional, default desktop)",
    "",
    "AI memos:",
    "  Sticky notes the user placed on the canvas as instructions for AI",
    "  agents. Each moc-memo line pairs a target element id with the",
    "  instruction text. Read them and apply or propose changes to the",
    "  targeted element.",
    "",
    "Reading order for AI agents:",
    "  1. The metadata tags and memos in this comment",
    "  2. The TSX component below",
    "  3. The editor data block, only when structural detail is needed",
    "",
    "Comment conventions inside the TSX:",
    "  moc-node <nodeId>  maps the element to its editor node",
    "  moc-role <role>    describes the element's role",
    "  moc-memo <memo>    summary of the memo attached to the element",
)

TAG_ORDER: tuple[str, ...] = ("version", "intent", "theme", "layout", "viewport")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def serialize_moc_file(doc: MocDocument) -> str:
    """Render a MocDocument as .moc text ending in a single newline."""
    parts = [serialize_metadata(doc.metadata)]

    if doc.imports.strip():
        parts.append(doc.imports.strip())

    if doc.tsx_source.strip():
        parts.append(doc.tsx_source.strip())

    if doc.editor_data is not None:
        parts.append(serialize_editor_data(doc.editor_data))

    return "\n\n".join(parts) + "\n"


def serialize_metadata(metadata: MocMetadata) -> str:
    r"""
    The /** ... */ header. `id` and `selection` are never written.

    Tag values are normalised, not escaped: line breaks become spaces, outer
    whitespace is trimmed and */ is written as *\/ (read back as */). Only
    memo text survives a round trip byte for byte.
    """
    lines = ["/**"]
    lines.extend(_comment_line(text) for text in PREAMBLE)
    lines.append(" *")

    values = {
        "version": metadata.version,
        "intent": metadata.intent,
        "theme": metadata.theme,
        "layout": metadata.layout,
        "viewport": metadata.viewport,
    }
    for key in TAG_ORDER:
        lines.append(_comment_line(f"@moc-{key} {_tag_value(values[key])}"))

    if metadata.craft_state:
        lines.append(_comment_line(f"@moc-craft-state {_tag_value(metadata.craft_state)}"))

    if metadata.memos:
        lines.append(" *")
        for memo in metadata.memos:
            lines.append(_comment_line(f'@moc-memo #{memo.target_id} "{escape_memo_text(memo.text)}"'))

    lines.append(" */")
    return "\n".join(lines)


def serialize_editor_data(editor_data: MocEditorData) -> str:
    """The trailing template-literal block holding the editor state."""
    body = json.dumps(editor_data.to_dict(), indent=2, ensure_ascii=False)
    return f"const {EDITOR_DATA_IDENTIFIER} = `\n{escape_template_body(body)}\n`;"


def escape_template_body(text: str) -> str:
    """Escape text for a JavaScript template literal: ` and ${."""
    return text.replace("`", "\\`").replace("${", "\\${")


def escape_memo_text(text: str) -> str:
    r"""
    Escape memo text for its double-quoted slot:
    \ → \\   " → \"   newline → \n   carriage return → \r   */ → *\/
    """
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("*/", "*\\/")
    )


def update_metadata_field(content: str, field: str, value: str) -> str:
    """
    Set one @moc-<field> tag in existing .moc text.
    Replaces every occurrence, or inserts the tag before the first " */".
    Content without a header comment is returned unchanged.
    """
    pattern = re.compile(r"(@moc-" + re.escape(field) + r")[ \t]+[^\r\n]+")
    safe_value = _tag_value(value)

    if pattern.search(content):
        return pattern.sub(lambda m: f"{m.group(1)} {safe_value}", content)

    insert_at = content.find(" */")
    if insert_at == -1:
        return content
    return content[:insert_at] + f" * @moc-{field} {safe_value}\n" + content[insert_at:]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _comment_line(text: str) -> str:
    return f" * {text}".rstrip()


def _tag_value(value: str) -> str:
    # Single line, trimmed, and never closes the comment
    return " ".join(str(value).splitlines()).replace("*/", "*\\/").strip()
