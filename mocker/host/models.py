"""Payloads exchanged with the visual editor."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class ViewportSetting(BaseModel):
    """Editor viewport. Presets carry a mode only; custom sizes carry width/height."""

    model_config = {"extra": "allow"}

    mode: Literal["desktop", "tablet", "mobile", "custom"] = "desktop"
    width: int | None = None
    height: int | None = None

    @property
    def label(self) -> str:
        """Header value: the preset name, or WxH for custom sizes."""
        if self.mode != "custom":
            return self.mode
        return f"{self.width}x{self.height}"


class EditorMemoPayload(BaseModel):
    """Rich memo as the editor sends it. Unknown keys pass through."""

    model_config = {"extra": "allow", "populate_by_name": True}

    id: str
    title: str = ""
    body: str = ""
    color: str = "yellow"
    collapsed: bool = False
    x: int | float = 0
    y: int | float = 0
    target_node_id: str | None = Field(default=None, alias="targetNodeId")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        """Numeric ids from older editors are kept as text."""
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v


class EditorSavePayload(BaseModel):
    """What the editor sends on save."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    craft_state: dict[str, Any] = Field(default_factory=dict, alias="craftState")
    memos: list[EditorMemoPayload] = Field(default_factory=list)
    viewport: ViewportSetting | None = None

    @field_validator("craft_state", mode="before")
    @classmethod
    def null_craft_state(cls, v: Any) -> Any:
        """A null craftState means an empty tree."""
        return {} if v is None else v

    @field_validator("memos", mode="before")
    @classmethod
    def null_memos(cls, v: Any) -> Any:
        return [] if v is None else v


class EditorLoadPayload(BaseModel):
    """What the editor receives on load."""

    model_config = {"populate_by_name": True}

    version: Literal[1] = 1
    craft_state: dict[str, Any] = Field(alias="craftState")
    memos: list[dict[str, Any]] = Field(default_factory=list)
    viewport: dict[str, Any] | None = None
