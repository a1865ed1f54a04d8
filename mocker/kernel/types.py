"""
Mocker Kernel — Shared Types

Data classes used across the parser, serializer, compiler and host bridge.
These are the contracts that bind the kernel together.

A .moc file is plain TSX with three layers:
- a JSDoc header carrying @moc-* metadata tags and lightweight memos
- an imports block and the generated component source
- an optional trailing editor-data block (craft state + rich memos)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MOC_FILE_EXTENSION = ".moc"
MOC_VERSION = "1.0.0"
EDITOR_DATA_IDENTIFIER = "__MOC_EDITOR_DATA__"
DEFAULT_COMPONENT_NAME = "MockPage"

THEMES: set[str] = {"light", "dark"}
LAYOUTS: set[str] = {"flow", "absolute"}
VIEWPORT_PRESETS: set[str] = {"desktop", "tablet", "mobile"}

VIEWPORT_WIDTHS: dict[str, int] = {
    "desktop": 1280,
    "tablet": 768,
    "mobile": 375,
}

DEFAULT_THEME = "light"
DEFAULT_LAYOUT = "flow"
DEFAULT_VIEWPORT = "desktop"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MocError(Exception):
    """Base class for kernel errors."""

    pass


class CraftStateCycleError(MocError):
    """Craft state lists a node as a descendant of itself."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Craft state contains a cycle through node {node_id!r}")
        self.node_id = node_id


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


@dataclass
class MocMemo:
    """Lightweight memo surfaced to AI readers in the file header."""

    target_id: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"targetId": self.target_id, "text": self.text}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MocMemo:
        return cls(target_id=d.get("targetId", ""), text=d.get("text", ""))


@dataclass
class SelectionContext:
    """Transient description of the editor's current selection. Never serialized."""

    component_type: str
    props: dict[str, Any] = field(default_factory=dict)
    tailwind_classes: list[str] = field(default_factory=list)
    parent_path: list[str] = field(default_factory=list)
    element_id: str | None = None
    source_line: int | None = None
    source_column: int | None = None


@dataclass
class MocMetadata:
    """Header metadata. Always populated, defaults fill anything missing."""

    version: str = MOC_VERSION
    id: str = ""
    intent: str = ""
    theme: str = DEFAULT_THEME
    layout: str = DEFAULT_LAYOUT
    viewport: str = DEFAULT_VIEWPORT
    memos: list[MocMemo] = field(default_factory=list)
    craft_state: str | None = None  # raw @moc-craft-state marker
    selection: SelectionContext | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "version": self.version,
            "id": self.id,
            "intent": self.intent,
            "theme": self.theme,
            "layout": self.layout,
            "viewport": self.viewport,
            "memos": [m.to_dict() for m in self.memos],
        }
        if self.craft_state is not None:
            d["craftState"] = self.craft_state
        return d


# ---------------------------------------------------------------------------
# Editor data
# ---------------------------------------------------------------------------

_EDITOR_MEMO_KEYS = ("id", "title", "body", "color", "collapsed", "x", "y", "targetNodeId")


@dataclass
class EditorMemo:
    """
    The editor's full sticky-note record.
    Keys the kernel does not know about are kept in `extra` so they survive
    a load/save cycle untouched.
    """

    id: str
    title: str = ""
    body: str = ""
    color: str = "yellow"
    collapsed: bool = False
    x: int | float = 0
    y: int | float = 0
    target_node_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def summary(self) -> str:
        """`title: body`, or whichever of the two is present."""
        if self.title:
            return f"{self.title}: {self.body}" if self.body else self.title
        return self.body

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "color": self.color,
            "collapsed": self.collapsed,
            "x": self.x,
            "y": self.y,
        }
        if self.target_node_id is not None:
            d["targetNodeId"] = self.target_node_id
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> EditorMemo:
        return cls(
            id=str(d.get("id", "")),
            title=d.get("title", ""),
            body=d.get("body", ""),
            color=d.get("color", "yellow"),
            collapsed=d.get("collapsed", False),
            x=d.get("x", 0),
            y=d.get("y", 0),
            target_node_id=d.get("targetNodeId"),
            extra={k: v for k, v in d.items() if k not in _EDITOR_MEMO_KEYS},
        )


@dataclass
class MocEditorData:
    """Embedded editor state. When present it is the source of truth for structure."""

    craft_state: dict[str, Any]
    memos: list[EditorMemo] = field(default_factory=list)
    viewport: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "craftState": self.craft_state,
            "memos": [m.to_dict() for m in self.memos],
        }
        if self.viewport is not None:
            d["viewport"] = self.viewport
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MocEditorData:
        """Raises ValueError when the payload does not have the expected shape."""
        if not isinstance(d, dict):
            raise ValueError("editor data must be a JSON object")
        craft_state = d.get("craftState") or {}
        memos = d.get("memos") or []
        viewport = d.get("viewport")
        if not isinstance(craft_state, dict):
            raise ValueError("craftState must be an object")
        if not isinstance(memos, list) or not all(isinstance(m, dict) for m in memos):
            raise ValueError("memos must be a list of objects")
        if viewport is not None and not isinstance(viewport, dict):
            raise ValueError("viewport must be an object")
        return cls(
            craft_state=craft_state,
            memos=[EditorMemo.from_dict(m) for m in memos],
            viewport=viewport,
        )


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@dataclass
class MocDocument:
    """In-memory representation of a .moc file."""

    metadata: MocMetadata
    imports: str = ""
    tsx_source: str = ""
    raw_content: str = ""
    editor_data: MocEditorData | None = None


@dataclass
class CompileResult:
    """Output of the tree compiler."""

    imports: str
    tsx_source: str


@dataclass
class CraftNode:
    """
    Read-only view of one serialized craft node.
    `type` is either a bare string or {"resolvedName": ...}.
    """

    type: str | dict[str, Any]
    props: dict[str, Any] = field(default_factory=dict)
    nodes: list[str] = field(default_factory=list)
    linked_nodes: dict[str, str] = field(default_factory=dict)
    parent: str | None = None
    is_canvas: bool = False
    display_name: str | None = None
    custom: dict[str, Any] = field(default_factory=dict)

    @property
    def resolved_name(self) -> str:
        if isinstance(self.type, str):
            return self.type
        if isinstance(self.type, dict):
            return self.type.get("resolvedName") or "Unknown"
        return "Unknown"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CraftNode:
        return cls(
            type=d.get("type", ""),
            props=d.get("props") or {},
            nodes=list(d.get("nodes") or []),
            linked_nodes=dict(d.get("linkedNodes") or {}),
            parent=d.get("parent"),
            is_canvas=bool(d.get("isCanvas", False)),
            display_name=d.get("displayName"),
            custom=d.get("custom") or {},
        )


@dataclass
class TemplateInfo:
    """A starter document offered when creating a new .moc file."""

    id: str
    label: str
    description: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def default_metadata() -> MocMetadata:
    """Metadata used when a file carries no header comment."""
    return MocMetadata()
