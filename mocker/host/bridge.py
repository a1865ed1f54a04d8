"""
Document bridge between the visual editor and .moc files.

Sits between the pure kernel (parser, compiler, serializer) and the host
that owns file IO. Converts file text to the JSON the editor loads, and
the JSON the editor saves back to file text.

Metadata that only lives in the header (intent, theme, layout, version)
is cached per document so a save does not lose it. Documents are keyed
explicitly by the caller, usually the file path.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePath

from pydantic import ValidationError

from mocker.host.config import settings
from mocker.host.models import EditorLoadPayload, EditorSavePayload
from mocker.kernel.compiler import craft_state_to_tsx
from mocker.kernel.parser import parse_moc_file
from mocker.kernel.serializer import serialize_moc_file
from mocker.kernel.types import (
    DEFAULT_LAYOUT,
    DEFAULT_THEME,
    DEFAULT_VIEWPORT,
    MOC_FILE_EXTENSION,
    MOC_VERSION,
    EditorMemo,
    MocDocument,
    MocEditorData,
    MocMemo,
    MocMetadata,
)

logger = logging.getLogger(__name__)

_CUSTOM_VIEWPORT = re.compile(r"^(\d+)x(\d+)$")


class DocumentBridge:
    """
    Converts between .moc text and editor JSON for any number of open documents.
    Not thread-safe; serialize calls per bridge.
    """

    def __init__(self) -> None:
        self._metadata: dict[str, MocMetadata] = {}

    # -- load --

    def file_to_editor_json(self, doc_key: str, content: str) -> str | None:
        """
        Parse file text and return the editor's load JSON.
        Returns None when the file has no editor data yet (fresh template).
        """
        doc = parse_moc_file(content)
        self._metadata[doc_key] = doc.metadata

        if doc.editor_data is None:
            logger.debug("No editor data in %s", doc_key)
            return None

        viewport = doc.editor_data.viewport
        if viewport is None:
            viewport = _viewport_from_label(doc.metadata.viewport)

        payload = EditorLoadPayload(
            craft_state=doc.editor_data.craft_state,
            memos=[m.to_dict() for m in doc.editor_data.memos],
            viewport=viewport,
        )
        return payload.model_dump_json(by_alias=True, exclude_none=True)

    # -- save --

    def editor_json_to_file(self, doc_key: str, payload_json: str, file_name: str) -> str:
        """
        Build .moc file text from the editor's save JSON.
        Invalid payloads are logged and returned unchanged.
        """
        try:
            payload = EditorSavePayload.model_validate_json(payload_json)
        except ValidationError as e:
            logger.warning("Rejected editor payload for %s: %s", doc_key, e.errors()[:3])
            return payload_json

        memos = [EditorMemo.from_dict(m.model_dump(by_alias=True, exclude_none=True)) for m in payload.memos]
        viewport = payload.viewport.model_dump(exclude_none=True) if payload.viewport else None

        component_name = component_name_for(file_name)
        compiled = craft_state_to_tsx(payload.craft_state, component_name, memos)

        existing = self._metadata.get(doc_key)
        metadata = MocMetadata(
            version=existing.version if existing else MOC_VERSION,
            id=existing.id if existing else "",
            intent=existing.intent if existing else "",
            theme=existing.theme if existing else DEFAULT_THEME,
            layout=existing.layout if existing else DEFAULT_LAYOUT,
            viewport=payload.viewport.label if payload.viewport else (existing.viewport if existing else DEFAULT_VIEWPORT),
            memos=header_memos(memos),
        )
        self._metadata[doc_key] = metadata

        doc = MocDocument(
            metadata=metadata,
            imports=compiled.imports,
            tsx_source=compiled.tsx_source,
            editor_data=MocEditorData(craft_state=payload.craft_state, memos=memos, viewport=viewport),
        )
        return serialize_moc_file(doc)

    # -- cache --

    def metadata_for(self, doc_key: str) -> MocMetadata | None:
        return self._metadata.get(doc_key)

    def forget(self, doc_key: str) -> None:
        """Drop cached metadata when the document is closed."""
        self._metadata.pop(doc_key, None)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def component_name_for(file_name: str) -> str:
    """Component name from a file path: base name without .moc."""
    base = PurePath(file_name.replace("\\", "/")).name
    if base.endswith(MOC_FILE_EXTENSION):
        base = base[: -len(MOC_FILE_EXTENSION)]
    return base or settings.DEFAULT_COMPONENT_NAME


def header_memos(memos: list[EditorMemo]) -> list[MocMemo]:
    """Lightweight header memos: only memos attached to a node and carrying text."""
    return [
        MocMemo(target_id=m.target_node_id, text=m.summary)
        for m in memos
        if m.target_node_id and (m.title or m.body)
    ]


def _viewport_from_label(label: str) -> dict[str, object] | None:
    match = _CUSTOM_VIEWPORT.match(label)
    if not match:
        return None
    return {"mode": "custom", "width": int(match.group(1)), "height": int(match.group(2))}
