"""
Mocker Kernel — Document Parser

Pure function: text → MocDocument. Never raises for string input.

A .moc file is also a plain TSX file that people and agents edit outside
the tool, so every layer degrades instead of failing:
- no header comment            → default metadata
- ill-formed tag or memo lines → dropped
- corrupt editor-data block    → editor_data is None (logged)

Uses regex on the raw text; no TSX parser dependency.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from enum import Enum
from typing import Any

from mocker.kernel.types import (
    DEFAULT_LAYOUT,
    DEFAULT_THEME,
    DEFAULT_VIEWPORT,
    EDITOR_DATA_IDENTIFIER,
    LAYOUTS,
    MOC_VERSION,
    THEMES,
    VIEWPORT_PRESETS,
    MocDocument,
    MocEditorData,
    MocMemo,
    MocMetadata,
    default_metadata,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

MOC_COMMENT_PATTERN = re.compile(r"/\*\*.*?\*/", re.DOTALL)

# Value runs to end of line; a tag with nothing after it does not match
MOC_TAG_PATTERN = re.compile(r"@moc-(\w[\w-]*)[ \t]+([^\r\n]+)")

# Quoted memo text; \" \\ \n \r and \<c> are escapes
MOC_MEMO_PATTERN = re.compile(r'@moc-memo[ \t]+#(\S+)[ \t]+"((?:[^"\\\r\n]|\\.)*)"')

_MEMO_ESCAPE = re.compile(r"\\(.)")
_MEMO_CONTROL = {"n": "\n", "r": "\r"}

EDITOR_DATA_TEMPLATE_PATTERN = re.compile(
    r"const\s+" + re.escape(EDITOR_DATA_IDENTIFIER) + r"\s*=\s*`((?:[^`\\]|\\.)*)`\s*;?",
    re.DOTALL,
)

EDITOR_DATA_LEGACY_PATTERN = re.compile(
    r"/\*\s*@moc-editor-data\b.*?DATA:\s*([A-Za-z0-9+/=\s]*?)\s*\*/",
    re.DOTALL,
)

_DECLARATION = re.compile(r"^(function|const|let|var|class)\s")
_COMPONENT_NAME = re.compile(r"export\s+default\s+function\s+(\w+)")
_CUSTOM_VIEWPORT = re.compile(r"^\d+x\d+$")


class EditorDataEncoding(str, Enum):
    """On-disk encodings of the editor-data block."""

    LEGACY = "legacy"  # /* @moc-editor-data DATA:<base64> */
    CURRENT = "current"  # const __MOC_EDITOR_DATA__ = `...`;


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_moc_file(content: str) -> MocDocument:
    """
    Parse .moc text into a MocDocument.
    Raises TypeError only when `content` is not a string.
    """
    if not isinstance(content, str):
        raise TypeError(f"parse_moc_file expects str, got {type(content).__name__}")

    editor_data, body = extract_editor_data(content)
    metadata = parse_metadata(body)
    imports, tsx_source = split_content(body)

    return MocDocument(
        metadata=metadata,
        imports=imports,
        tsx_source=tsx_source,
        raw_content=content,
        editor_data=editor_data,
    )


def parse_metadata(content: str) -> MocMetadata:
    """Read @moc-* tags and memos from the first /** ... */ comment."""
    comment_match = MOC_COMMENT_PATTERN.search(content)
    if not comment_match:
        logger.debug("No metadata comment found, using defaults")
        return default_metadata()

    comment = comment_match.group(0)
    tags: dict[str, str] = {}
    for match in MOC_TAG_PATTERN.finditer(comment):
        key = match.group(1)
        if key != "memo":
            tags[key] = _strip_comment_tail(match.group(2))

    _log_unrecognised_values(tags)

    memos = [
        MocMemo(target_id=m.group(1), text=unescape_memo_text(m.group(2)))
        for m in MOC_MEMO_PATTERN.finditer(comment)
    ]

    return MocMetadata(
        version=tags.get("version") or MOC_VERSION,
        id=tags.get("id") or "",
        intent=tags.get("intent") or "",
        theme=tags.get("theme") or DEFAULT_THEME,
        layout=tags.get("layout") or DEFAULT_LAYOUT,
        viewport=tags.get("viewport") or DEFAULT_VIEWPORT,
        memos=memos,
        craft_state=tags.get("craft-state") or None,
    )


def extract_editor_data(content: str) -> tuple[MocEditorData | None, str]:
    """
    Find the trailing editor-data block in either encoding.
    Returns (decoded data or None, content with the block removed).
    """
    located = _locate_editor_data(content)
    if located is None:
        return None, content

    encoding, payload, start, end = located
    remainder = content[:start] + content[end:]

    try:
        data = _decode_editor_data(encoding, payload)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValueError, RecursionError) as e:
        logger.warning("Ignoring unreadable %s editor-data block: %s", encoding.value, e)
        return None, remainder

    return data, remainder


def split_content(content: str) -> tuple[str, str]:
    """
    Drop the header comment, then split into (imports, tsx_source).

    Lines count as imports while they start with `import`, are blank after
    the first import, or continue a multi-line import (anything that does
    not open a top-level declaration). The first other line starts the
    component source.
    """
    without_comment = MOC_COMMENT_PATTERN.sub("", content, count=1).strip()
    lines = without_comment.split("\n")

    import_lines: list[str] = []
    import_end = 0
    for i, raw in enumerate(lines):
        line = raw.strip()
        if (
            line.startswith("import ")
            or line.startswith("import{")
            or (
                import_lines
                and line != ""
                and not line.startswith("export ")
                and not _DECLARATION.match(line)
            )
        ):
            import_lines.append(raw)
            import_end = i + 1
        elif line == "" and import_lines:
            import_lines.append(raw)
            import_end = i + 1
        elif import_lines or line != "":
            break

    imports = "\n".join(import_lines).strip()
    tsx_source = "\n".join(lines[import_end:]).strip()
    return imports, tsx_source


def extract_component_name(tsx_source: str) -> str | None:
    """Name of the default-exported function component, if any."""
    match = _COMPONENT_NAME.search(tsx_source)
    return match.group(1) if match else None


def unescape_memo_text(text: str) -> str:
    r"""Reverse memo escaping: \n and \r are line breaks, \<c> is <c>."""
    return _MEMO_ESCAPE.sub(lambda m: _MEMO_CONTROL.get(m.group(1), m.group(1)), text)


def unescape_template_body(body: str) -> str:
    """Undo the template-literal escaping of backticks and ${."""
    return body.replace("\\`", "`").replace("\\${", "${")


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _locate_editor_data(content: str) -> tuple[EditorDataEncoding, str, int, int] | None:
    # The block is written last, so prefer the final occurrence
    current = None
    for current in EDITOR_DATA_TEMPLATE_PATTERN.finditer(content):
        pass
    if current is not None:
        return EditorDataEncoding.CURRENT, current.group(1), current.start(), current.end()

    legacy = None
    for legacy in EDITOR_DATA_LEGACY_PATTERN.finditer(content):
        pass
    if legacy is not None:
        return EditorDataEncoding.LEGACY, legacy.group(1), legacy.start(), legacy.end()

    return None


def _decode_editor_data(encoding: EditorDataEncoding, payload: str) -> MocEditorData:
    if encoding is EditorDataEncoding.LEGACY:
        compact = re.sub(r"\s+", "", payload)
        text = base64.b64decode(compact, validate=True).decode("utf-8")
    else:
        text = unescape_template_body(payload)

    data: Any = json.loads(text)
    return MocEditorData.from_dict(data)


def _log_unrecognised_values(tags: dict[str, str]) -> None:
    # Values are kept verbatim
    if tags.get("theme") and tags["theme"] not in THEMES:
        logger.debug("Unrecognised theme %r", tags["theme"])
    if tags.get("layout") and tags["layout"] not in LAYOUTS:
        logger.debug("Unrecognised layout %r", tags["layout"])
    viewport = tags.get("viewport")
    if viewport and viewport not in VIEWPORT_PRESETS and not _CUSTOM_VIEWPORT.match(viewport):
        logger.debug("Unrecognised viewport %r", viewport)


def _strip_comment_tail(value: str) -> str:
    # A tag on the closing line ("@moc-theme dark */") must not keep the */
    # *\/ always reads back as */, so a literal *\/ in a value does not survive
    value = value.strip()
    if value.endswith("*/"):
        value = value[:-2].rstrip()
    return value.replace("*\\/", "*/")
