"""
Mocker Kernel — Component Registry

Static lookup tables describing how each craft node type becomes JSX:
output tag, optional import, attribute allowlist, text-bearing prop and
container flag, plus the documented default value of every prop.

Node types form a closed set (NodeKind). Anything else resolves to
UnknownKind and is rendered as a visible placeholder by the compiler.
Tables are wrapped in MappingProxyType and never mutated at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class NodeKind(str, Enum):
    """Every craft node type the compiler knows how to render."""

    CONTAINER = "CraftContainer"
    FREE_CANVAS = "CraftFreeCanvas"
    DIV = "CraftDiv"
    TEXT = "CraftText"
    PLACEHOLDER_IMAGE = "CraftPlaceholderImage"
    IMAGE = "CraftImage"
    BUTTON = "CraftButton"
    INPUT = "CraftInput"
    CARD = "CraftCard"
    LABEL = "CraftLabel"
    BADGE = "CraftBadge"
    SEPARATOR = "CraftSeparator"
    TABLE = "CraftTable"
    ACCORDION = "CraftAccordion"
    ALERT = "CraftAlert"
    ASPECT_RATIO = "CraftAspectRatio"
    AVATAR = "CraftAvatar"
    BREADCRUMB = "CraftBreadcrumb"
    CHECKBOX = "CraftCheckbox"
    COLLAPSIBLE = "CraftCollapsible"
    PAGINATION = "CraftPagination"
    PROGRESS = "CraftProgress"
    RADIO_GROUP = "CraftRadioGroup"
    SCROLL_AREA = "CraftScrollArea"
    SKELETON = "CraftSkeleton"
    SLIDER = "CraftSlider"
    SWITCH = "CraftSwitch"
    TABS = "CraftTabs"
    TEXTAREA = "CraftTextarea"
    TOGGLE = "CraftToggle"
    TOGGLE_GROUP = "CraftToggleGroup"
    SELECT = "CraftSelect"
    CALENDAR = "CraftCalendar"
    RESIZABLE = "CraftResizable"
    CAROUSEL = "CraftCarousel"
    CHART = "CraftChart"
    FORM = "CraftForm"
    DIALOG = "CraftDialog"
    ALERT_DIALOG = "CraftAlertDialog"
    SHEET = "CraftSheet"
    DRAWER = "CraftDrawer"
    DROPDOWN_MENU = "CraftDropdownMenu"
    CONTEXT_MENU = "CraftContextMenu"
    POPOVER = "CraftPopover"
    HOVER_CARD = "CraftHoverCard"
    NAVIGATION_MENU = "CraftNavigationMenu"
    MENUBAR = "CraftMenubar"
    COMMAND = "CraftCommand"
    TOOLTIP = "CraftTooltip"
    SONNER = "CraftSonner"


@dataclass(frozen=True)
class UnknownKind:
    """A type name with no registry entry."""

    name: str


@dataclass(frozen=True)
class RenderPolicy:
    """How one node kind is rendered."""

    tag: str
    props_map: tuple[str, ...]
    is_container: bool = False
    text_prop: str | None = None
    import_from: str | None = None
    import_name: str | None = None


def _ui(tag: str, module: str, props_map: tuple[str, ...], **kwargs: Any) -> RenderPolicy:
    """Policy for a component imported from the local UI kit."""
    return RenderPolicy(
        tag=tag,
        props_map=props_map,
        import_from=f"@/components/ui/{module}",
        import_name=tag,
        **kwargs,
    )


def _trigger_button() -> RenderPolicy:
    # Legacy standalone overlays render as their trigger button
    return _ui("Button", "button", ("className",), text_prop="triggerText")


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------

_POLICIES: dict[NodeKind, RenderPolicy] = {
    # Layout / HTML
    NodeKind.CONTAINER: RenderPolicy("div", ("className",), is_container=True),
    NodeKind.FREE_CANVAS: RenderPolicy("div", ("className",), is_container=True),
    NodeKind.DIV: RenderPolicy("div", ("className",), is_container=True),
    NodeKind.TEXT: RenderPolicy("p", ("className",), text_prop="text"),
    NodeKind.PLACEHOLDER_IMAGE: RenderPolicy("img", ("src", "alt", "className")),
    NodeKind.IMAGE: RenderPolicy("img", ("src", "alt", "className")),
    # UI kit
    NodeKind.BUTTON: _ui("Button", "button", ("variant", "size", "disabled", "className"), text_prop="text"),
    NodeKind.INPUT: _ui("Input", "input", ("type", "placeholder", "disabled", "className")),
    NodeKind.CARD: _ui("Card", "card", ("className",), is_container=True),
    NodeKind.LABEL: _ui("Label", "label", ("htmlFor", "className"), text_prop="text"),
    NodeKind.BADGE: _ui("Badge", "badge", ("variant", "className"), text_prop="text"),
    NodeKind.SEPARATOR: _ui("Separator", "separator", ("orientation", "className")),
    NodeKind.TABLE: _ui("Table", "table", ("className",)),
    NodeKind.ACCORDION: _ui("Accordion", "accordion", ("type", "className")),
    NodeKind.ALERT: _ui("Alert", "alert", ("variant", "className")),
    NodeKind.ASPECT_RATIO: _ui("AspectRatio", "aspect-ratio", ("ratio", "className"), is_container=True),
    NodeKind.AVATAR: _ui("Avatar", "avatar", ("className",)),
    NodeKind.BREADCRUMB: _ui("Breadcrumb", "breadcrumb", ("className",)),
    NodeKind.CHECKBOX: _ui("Checkbox", "checkbox", ("checked", "disabled", "className"), text_prop="label"),
    NodeKind.COLLAPSIBLE: _ui("Collapsible", "collapsible", ("open", "className"), is_container=True),
    NodeKind.PAGINATION: _ui("Pagination", "pagination", ("className",)),
    NodeKind.PROGRESS: _ui("Progress", "progress", ("value", "className")),
    NodeKind.RADIO_GROUP: _ui("RadioGroup", "radio-group", ("value", "className")),
    NodeKind.SCROLL_AREA: _ui("ScrollArea", "scroll-area", ("className",), is_container=True),
    NodeKind.SKELETON: _ui("Skeleton", "skeleton", ("className",)),
    NodeKind.SLIDER: _ui("Slider", "slider", ("value", "min", "max", "step", "className")),
    NodeKind.SWITCH: _ui("Switch", "switch", ("checked", "disabled", "className"), text_prop="label"),
    NodeKind.TABS: _ui("Tabs", "tabs", ("className",)),
    NodeKind.TEXTAREA: _ui("Textarea", "textarea", ("placeholder", "rows", "disabled", "className")),
    NodeKind.TOGGLE: _ui("Toggle", "toggle", ("variant", "pressed", "className"), text_prop="text"),
    NodeKind.TOGGLE_GROUP: _ui("ToggleGroup", "toggle-group", ("type", "className")),
    NodeKind.SELECT: _ui("Select", "select", ("placeholder", "className")),
    NodeKind.CALENDAR: _ui("Calendar", "calendar", ("className",)),
    NodeKind.RESIZABLE: _ui("ResizablePanelGroup", "resizable", ("direction", "className")),
    NodeKind.CAROUSEL: _ui("Carousel", "carousel", ("className",)),
    NodeKind.CHART: RenderPolicy("div", ("className",)),
    NodeKind.FORM: RenderPolicy("form", ("className",)),
    # Overlays
    NodeKind.DIALOG: _ui("Button", "button", ("variant", "className"), text_prop="triggerText"),
    NodeKind.ALERT_DIALOG: _trigger_button(),
    NodeKind.SHEET: _trigger_button(),
    NodeKind.DRAWER: _trigger_button(),
    NodeKind.DROPDOWN_MENU: _trigger_button(),
    NodeKind.CONTEXT_MENU: RenderPolicy("div", ("className",)),
    NodeKind.POPOVER: _trigger_button(),
    NodeKind.HOVER_CARD: RenderPolicy("span", ("className",), text_prop="triggerText"),
    NodeKind.NAVIGATION_MENU: RenderPolicy("nav", ("className",)),
    NodeKind.MENUBAR: RenderPolicy("div", ("className",)),
    NodeKind.COMMAND: RenderPolicy("div", ("className",)),
    NodeKind.TOOLTIP: _trigger_button(),
    NodeKind.SONNER: _trigger_button(),
}

POLICIES: Mapping[NodeKind, RenderPolicy] = MappingProxyType(_POLICIES)


# ---------------------------------------------------------------------------
# Documented defaults (omitted from generated JSX)
# ---------------------------------------------------------------------------

_TOOLTIP_DEFAULTS = {"tooltipText": "", "tooltipSide": ""}

_DEFAULTS: dict[NodeKind, dict[str, Any]] = {
    NodeKind.BUTTON: {
        "variant": "default",
        "size": "default",
        "disabled": False,
        "text": "Button",
        "overlayType": "none",
        "linkedMocPath": "",
        "sheetSide": "right",
        "overlayWidth": "",
        "overlayHeight": "",
        "overlayClassName": "",
        "toastText": "",
        "toastPosition": "bottom-right",
        **_TOOLTIP_DEFAULTS,
    },
    NodeKind.INPUT: {"type": "text", "disabled": False, "tooltipTrigger": "hover", **_TOOLTIP_DEFAULTS},
    NodeKind.BADGE: {"variant": "default", "text": "Badge", **_TOOLTIP_DEFAULTS},
    NodeKind.SEPARATOR: {"orientation": "horizontal"},
    NodeKind.TEXT: {"tag": "p", "text": "Text"},
    NodeKind.PLACEHOLDER_IMAGE: {"alt": "Placeholder", "keepAspectRatio": False},
    NodeKind.IMAGE: {"alt": "", "objectFit": "cover", "keepAspectRatio": False},
    NodeKind.LABEL: {"text": "Label", **_TOOLTIP_DEFAULTS},
    NodeKind.CARD: {"title": "Card Title", "description": "", "contextMenuMocPath": ""},
    NodeKind.CONTAINER: {
        "display": "flex",
        "flexDirection": "column",
        "justifyContent": "start",
        "alignItems": "stretch",
        "gap": "4",
        "gridCols": 3,
        "contextMenuMocPath": "",
    },
    NodeKind.DIV: {"contextMenuMocPath": ""},
    NodeKind.ACCORDION: {"items": "Item 1,Item 2,Item 3", "type": "single", "linkedMocPaths": ""},
    NodeKind.ALERT: {
        "title": "Alert",
        "description": "This is an alert message.",
        "variant": "default",
        "icon": "AlertCircle",
    },
    NodeKind.ASPECT_RATIO: {"ratio": 1.78},
    NodeKind.AVATAR: {"src": "", "fallback": "AB"},
    NodeKind.BREADCRUMB: {"items": "Home,Products,Current"},
    NodeKind.CHECKBOX: {"label": "Accept terms", "checked": False, "disabled": False, **_TOOLTIP_DEFAULTS},
    NodeKind.COLLAPSIBLE: {"open": False},
    NodeKind.PAGINATION: {"totalPages": 5, "currentPage": 1},
    NodeKind.PROGRESS: {"value": 50},
    NodeKind.RADIO_GROUP: {"items": "Option A,Option B,Option C", "value": "Option A"},
    NodeKind.SCROLL_AREA: {},
    NodeKind.SKELETON: {"width": "100%", "height": "20px"},
    NodeKind.SLIDER: {"value": 50, "min": 0, "max": 100, "step": 1},
    NodeKind.SWITCH: {"label": "Toggle", "checked": False, "disabled": False},
    NodeKind.TABS: {"items": "Tab 1,Tab 2,Tab 3"},
    NodeKind.TEXTAREA: {"disabled": False, "tooltipTrigger": "hover", **_TOOLTIP_DEFAULTS},
    NodeKind.TOGGLE: {"text": "Toggle", "variant": "default", "pressed": False},
    NodeKind.TOGGLE_GROUP: {"items": "Bold,Italic,Underline", "type": "single"},
    NodeKind.SELECT: {"items": "Option 1,Option 2,Option 3", "placeholder": "Select an option"},
    NodeKind.CALENDAR: {},
    NodeKind.RESIZABLE: {"direction": "horizontal"},
    NodeKind.CAROUSEL: {"items": "Slide 1,Slide 2,Slide 3"},
    NodeKind.CHART: {"chartType": "bar"},
    NodeKind.FORM: {},
    NodeKind.DIALOG: {"triggerText": "Open Dialog", "variant": "default", "linkedMocPath": ""},
    NodeKind.ALERT_DIALOG: {"triggerText": "Open Alert", "linkedMocPath": ""},
    NodeKind.SHEET: {"triggerText": "Open Sheet", "side": "right", "linkedMocPath": ""},
    NodeKind.DRAWER: {"triggerText": "Open Drawer", "linkedMocPath": ""},
    NodeKind.DROPDOWN_MENU: {"triggerText": "Open Menu", "linkedMocPath": ""},
    NodeKind.CONTEXT_MENU: {"linkedMocPath": ""},
    NodeKind.POPOVER: {"triggerText": "Open Popover", "linkedMocPath": ""},
    NodeKind.HOVER_CARD: {"triggerText": "Hover me", "linkedMocPath": ""},
    NodeKind.NAVIGATION_MENU: {"items": "Home,About,Services,Contact", "linkedMocPath": ""},
    NodeKind.MENUBAR: {"items": "File,Edit,View,Help", "linkedMocPath": ""},
    NodeKind.COMMAND: {
        "placeholder": "Type a command or search...",
        "items": "Calendar,Search,Settings",
        "linkedMocPath": "",
    },
    NodeKind.TOOLTIP: {"triggerText": "Hover", "text": "Tooltip text"},
    NodeKind.SONNER: {"triggerText": "Show Toast", "text": "Event has been created."},
}

DEFAULT_PROPS: Mapping[NodeKind, Mapping[str, Any]] = MappingProxyType(
    {kind: MappingProxyType(values) for kind, values in _DEFAULTS.items()}
)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


# ---------------------------------------------------------------------------
# Extra import groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportGroup:
    module: str
    names: tuple[str, ...]


OVERLAY_IMPORTS: Mapping[str, ImportGroup] = MappingProxyType(
    {
        "dialog": ImportGroup("@/components/ui/dialog", ("Dialog", "DialogTrigger", "DialogContent")),
        "alert-dialog": ImportGroup(
            "@/components/ui/alert-dialog",
            ("AlertDialog", "AlertDialogTrigger", "AlertDialogContent", "AlertDialogAction", "AlertDialogCancel"),
        ),
        "sheet": ImportGroup("@/components/ui/sheet", ("Sheet", "SheetTrigger", "SheetContent")),
        "drawer": ImportGroup("@/components/ui/drawer", ("Drawer", "DrawerTrigger", "DrawerContent")),
        "popover": ImportGroup("@/components/ui/popover", ("Popover", "PopoverTrigger", "PopoverContent")),
        "dropdown-menu": ImportGroup(
            "@/components/ui/dropdown-menu",
            ("DropdownMenu", "DropdownMenuTrigger", "DropdownMenuContent"),
        ),
    }
)

TOOLTIP_IMPORT = ImportGroup(
    "@/components/ui/tooltip",
    ("TooltipProvider", "Tooltip", "TooltipTrigger", "TooltipContent"),
)

CONTEXT_MENU_IMPORT = ImportGroup(
    "@/components/ui/context-menu",
    ("ContextMenu", "ContextMenuTrigger", "ContextMenuContent"),
)

ACCORDION_PARTS_IMPORT = ImportGroup(
    "@/components/ui/accordion",
    ("AccordionItem", "AccordionTrigger", "AccordionContent"),
)

ICON_MODULE = "lucide-react"
TOAST_MODULE = "sonner"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

_BY_NAME: Mapping[str, NodeKind] = MappingProxyType({kind.value: kind for kind in NodeKind})


def resolve_kind(type_field: Any) -> NodeKind | UnknownKind:
    """
    Resolve a craft node's `type` (bare string or {"resolvedName": ...})
    to a NodeKind, or UnknownKind carrying the original name.
    """
    if isinstance(type_field, str):
        name = type_field
    elif isinstance(type_field, dict):
        name = type_field.get("resolvedName") or "Unknown"
    else:
        name = "Unknown"
    kind = _BY_NAME.get(name)
    return kind if kind is not None else UnknownKind(name)


def policy_for(kind: NodeKind | UnknownKind | str) -> RenderPolicy | None:
    """Render policy for a kind or type name. None for unknown types."""
    if isinstance(kind, str) and not isinstance(kind, NodeKind):
        kind = resolve_kind(kind)
    if isinstance(kind, UnknownKind):
        return None
    return POLICIES.get(kind)


def defaults_for(kind: NodeKind | UnknownKind | str) -> Mapping[str, Any]:
    """Documented default prop values for a kind or type name."""
    if isinstance(kind, str) and not isinstance(kind, NodeKind):
        kind = resolve_kind(kind)
    if isinstance(kind, UnknownKind):
        return _EMPTY
    return DEFAULT_PROPS.get(kind, _EMPTY)


def is_default(kind: NodeKind | UnknownKind | str, key: str, value: Any) -> bool:
    """
    True when `value` equals the documented default for `key`.
    Booleans only ever match booleans (True is not 1).
    """
    defaults = defaults_for(kind)
    if key not in defaults:
        return False
    default = defaults[key]
    if isinstance(value, bool) or isinstance(default, bool):
        return isinstance(value, bool) and isinstance(default, bool) and value == default
    return value == default
