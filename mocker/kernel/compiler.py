"""
Mocker Kernel — Tree Compiler

Pure function: (craft_state, component_name, memos?) → CompileResult
No IO. Deterministic: same input → same output, always.

Walks the craft-state tree from ROOT and emits:
- an import block, one line per module, names deduplicated and sorted,
  modules in first-seen order
- a default-exported function component wrapping ROOT's rendered children

Every rendered node is preceded by {/* @moc-node <id> */} so generated
markup can be traced back to the editor tree.
"""

from __future__ import annotations

from typing import Any

from mocker.kernel.registry import (
    ACCORDION_PARTS_IMPORT,
    CONTEXT_MENU_IMPORT,
    ICON_MODULE,
    OVERLAY_IMPORTS,
    TOAST_MODULE,
    TOOLTIP_IMPORT,
    NodeKind,
    RenderPolicy,
    UnknownKind,
    is_default,
    policy_for,
    resolve_kind,
)
from mocker.kernel.types import (
    DEFAULT_COMPONENT_NAME,
    CompileResult,
    CraftNode,
    CraftStateCycleError,
    EditorMemo,
)

ROOT_ID = "ROOT"
INDENT = "  "

# ---------------------------------------------------------------------------
# Tailwind lookup tables for layout containers
# ---------------------------------------------------------------------------

JUSTIFY_CLASSES: dict[str, str] = {
    "start": "justify-start",
    "center": "justify-center",
    "end": "justify-end",
    "between": "justify-between",
    "around": "justify-around",
    "evenly": "justify-evenly",
}

ALIGN_CLASSES: dict[str, str] = {
    "start": "items-start",
    "center": "items-center",
    "end": "items-end",
    "stretch": "items-stretch",
    "baseline": "items-baseline",
}

# Always self-closing, whatever their children
_SELF_CLOSING: set[NodeKind] = {
    NodeKind.IMAGE,
    NodeKind.PLACEHOLDER_IMAGE,
    NodeKind.SEPARATOR,
    NodeKind.PROGRESS,
    NodeKind.SLIDER,
    NodeKind.SKELETON,
}

# Self-closing form inputs that may sit inside a tooltip
_SELF_CLOSING_INPUTS: set[NodeKind] = {NodeKind.INPUT, NodeKind.TEXTAREA}

# Text-bearing kinds that honour tooltipText
_TOOLTIP_TEXT_KINDS: set[NodeKind] = {NodeKind.BADGE, NodeKind.LABEL, NodeKind.CHECKBOX}

_OVERLAY_TAGS: dict[str, tuple[str, str, str]] = {
    "dialog": ("Dialog", "DialogTrigger", "DialogContent"),
    "alert-dialog": ("AlertDialog", "AlertDialogTrigger", "AlertDialogContent"),
    "sheet": ("Sheet", "SheetTrigger", "SheetContent"),
    "drawer": ("Drawer", "DrawerTrigger", "DrawerContent"),
    "popover": ("Popover", "PopoverTrigger", "PopoverContent"),
    "dropdown-menu": ("DropdownMenu", "DropdownMenuTrigger", "DropdownMenuContent"),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def craft_state_to_tsx(
    craft_state: dict[str, Any] | None,
    component_name: str = DEFAULT_COMPONENT_NAME,
    memos: list[EditorMemo] | None = None,
) -> CompileResult:
    """
    Compile a craft-state tree into TSX source and an import block.

    Raises CraftStateCycleError if a node is reachable from itself.
    Unknown node types never raise; they become JSX comment placeholders.
    """
    if not craft_state or ROOT_ID not in craft_state:
        return CompileResult(imports="", tsx_source=stub_component(component_name))

    compiler = _TsxCompiler(craft_state, memos or [])
    compiler.collect_imports(ROOT_ID, ())

    root = compiler.node(ROOT_ID) or CraftNode(type="CraftContainer")
    rendered = [compiler.render_node(child_id, 3, (ROOT_ID,)) for child_id in root.nodes]
    body = "\n".join(r for r in rendered if r)

    imports = compiler.import_block()
    if not body:
        return CompileResult(imports=imports, tsx_source=stub_component(component_name))

    class_name = _join_classes(build_container_classes(root.props), root.props.get("className") or "")
    class_attr = _class_attr(class_name)
    style_attr = build_style_attr(root.props)
    root_comments = compiler.moc_comments(ROOT_ID, INDENT * 3, root.props)

    tsx_source = "\n".join(
        [
            f"export default function {component_name}() {{",
            "  return (",
            "    <>",
            root_comments,
            f"      <div{class_attr}{style_attr}>",
            body,
            "      </div>",
            "    </>",
            "  );",
            "}",
        ]
    )
    return CompileResult(imports=imports, tsx_source=tsx_source)


def stub_component(component_name: str) -> str:
    """Minimal component used when there is nothing to render."""
    return f"export default function {component_name}() {{\n  return <div />;\n}}"


def escape_jsx(text: str) -> str:
    """Escape text content: & < > and the JSX interpolation braces."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def escape_attr(text: str) -> str:
    """Escape a double-quoted attribute value."""
    return text.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;").replace(">", "&gt;")


def escape_js_string(text: str) -> str:
    """Escape text for a double-quoted JavaScript string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")


def build_props_string(kind: NodeKind, props: dict[str, Any], policy: RenderPolicy) -> str:
    """
    Attributes from the policy allowlist. className is handled separately;
    None, empty strings and documented defaults are left out.
    """
    parts: list[str] = []
    for key in policy.props_map:
        if key == "className":
            continue
        value = props.get(key)
        if value is None or value == "":
            continue
        if is_default(kind, key, value):
            continue

        if isinstance(value, bool):
            if value:
                parts.append(key)
        elif isinstance(value, (int, float)):
            parts.append(f"{key}={{{format_number(value)}}}")
        else:
            parts.append(f'{key}="{escape_attr(str(value))}"')

    return " " + " ".join(parts) if parts else ""


def build_container_classes(props: dict[str, Any]) -> str:
    """Tailwind classes for a flex/grid layout container."""
    classes: list[str] = []
    display = props.get("display") or "flex"
    classes.append("grid" if display == "grid" else "flex")

    if display == "flex":
        direction = props.get("flexDirection") or "column"
        classes.append("flex-row" if direction == "row" else "flex-col")

        justify = props.get("justifyContent") or "start"
        if justify in JUSTIFY_CLASSES and justify != "start":
            classes.append(JUSTIFY_CLASSES[justify])

        align = props.get("alignItems") or "stretch"
        if align in ALIGN_CLASSES and align != "stretch":
            classes.append(ALIGN_CLASSES[align])
    else:
        cols = props.get("gridCols") or 3
        classes.append(f"grid-cols-{format_number(cols) if isinstance(cols, (int, float)) else cols}")

    gap = str(props.get("gap") or "4")
    if gap != "0":
        classes.append(f"gap-{gap}")

    return " ".join(classes)


def build_style_attr(props: dict[str, Any]) -> str:
    """Inline style for non-default width, height and objectFit."""
    parts: list[str] = []
    width = props.get("width")
    height = props.get("height")
    object_fit = props.get("objectFit")
    if width and width != "auto":
        parts.append(f'width: "{escape_js_string(str(width))}"')
    if height and height != "auto":
        parts.append(f'height: "{escape_js_string(str(height))}"')
    if object_fit and object_fit != "cover":
        parts.append(f'objectFit: "{escape_js_string(str(object_fit))}"')
    if not parts:
        return ""
    return f" style={{{{ {', '.join(parts)} }}}}"


def format_number(value: int | float) -> str:
    """Numbers as JavaScript prints them: 3.0 → "3"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------


class _TsxCompiler:
    """Holds the tree and the import table for one compile call."""

    def __init__(self, craft_state: dict[str, Any], memos: list[EditorMemo]) -> None:
        self._state = craft_state
        self._memos = memos
        self._imports: dict[str, set[str]] = {}

    def node(self, node_id: str) -> CraftNode | None:
        data = self._state.get(node_id)
        if not isinstance(data, dict):
            return None
        return CraftNode.from_dict(data)

    # -- imports --

    def add_import(self, module: str, name: str) -> None:
        self._imports.setdefault(module, set()).add(name)

    def import_block(self) -> str:
        lines = [
            f'import {{ {", ".join(sorted(names))} }} from "{module}";'
            for module, names in self._imports.items()
        ]
        return "\n".join(lines)

    def collect_imports(self, node_id: str, ancestors: tuple[str, ...]) -> None:
        if node_id in ancestors:
            raise CraftStateCycleError(node_id)
        node = self.node(node_id)
        if node is None:
            return

        kind = resolve_kind(node.type)
        policy = policy_for(kind)
        props = node.props

        if policy is not None and policy.import_from and policy.import_name:
            self.add_import(policy.import_from, policy.import_name)

        if kind is NodeKind.ALERT:
            self.add_import(ICON_MODULE, props.get("icon") or "AlertCircle")

        if kind is NodeKind.ACCORDION:
            for name in ACCORDION_PARTS_IMPORT.names:
                self.add_import(ACCORDION_PARTS_IMPORT.module, name)

        if kind is NodeKind.BUTTON:
            overlay = OVERLAY_IMPORTS.get(props.get("overlayType") or "none")
            if overlay is not None:
                for name in overlay.names:
                    self.add_import(overlay.module, name)
            if props.get("toastText"):
                self.add_import(TOAST_MODULE, "toast")

        if props.get("tooltipText"):
            for name in TOOLTIP_IMPORT.names:
                self.add_import(TOOLTIP_IMPORT.module, name)

        if props.get("contextMenuMocPath"):
            for name in CONTEXT_MENU_IMPORT.names:
                self.add_import(CONTEXT_MENU_IMPORT.module, name)

        path = ancestors + (node_id,)
        for child_id in node.nodes:
            self.collect_imports(child_id, path)
        for linked_id in node.linked_nodes.values():
            self.collect_imports(linked_id, path)

    # -- comments --

    def moc_comments(self, node_id: str, pad: str, props: dict[str, Any]) -> str:
        comments = [f"{pad}{{/* @moc-node {node_id} */}}"]
        role = props.get("role")
        if role:
            comments.append(f'{pad}{{/* @moc-role "{_comment_safe(str(role))}" */}}')
        memo = next((m for m in self._memos if m.target_node_id == node_id), None)
        if memo is not None and memo.summary:
            comments.append(f'{pad}{{/* @moc-memo "{_comment_safe(memo.summary)}" */}}')
        return "\n".join(comments)

    # -- rendering --

    def render_children(self, node: CraftNode, indent: int, path: tuple[str, ...]) -> list[str]:
        rendered = [self.render_node(child_id, indent, path) for child_id in node.nodes]
        return [r for r in rendered if r]

    def render_node(self, node_id: str, indent: int, ancestors: tuple[str, ...]) -> str:
        if node_id in ancestors:
            raise CraftStateCycleError(node_id)
        node = self.node(node_id)
        if node is None:
            return ""

        pad = INDENT * indent
        kind = resolve_kind(node.type)
        policy = policy_for(kind)
        if isinstance(kind, UnknownKind) or policy is None:
            return f"{pad}{{/* Unknown: {_comment_safe(node.resolved_name)} */}}"

        props = node.props
        path = ancestors + (node_id,)
        comments = self.moc_comments(node_id, pad, props)

        # CraftText can render as h1-h6 or span
        tag = policy.tag
        if kind is NodeKind.TEXT:
            tag_prop = props.get("tag")
            if tag_prop and tag_prop != "p":
                tag = str(tag_prop)

        props_str = build_props_string(kind, props, policy)

        container_class = ""
        if kind is NodeKind.CONTAINER:
            container_class = build_container_classes(props)
        elif kind is NodeKind.FREE_CANVAS:
            container_class = "relative"
        class_name = _join_classes(container_class, props.get("className") or "")
        class_attr = _class_attr(class_name)
        style_attr = build_style_attr(props)
        attrs = f"{props_str}{class_attr}{style_attr}"

        text_content = props.get(policy.text_prop) if policy.text_prop else None
        toast_click = _toast_on_click(props) if kind is NodeKind.BUTTON else ""

        if kind is NodeKind.CARD:
            rendered = self._render_card(node, tag, attrs, comments, pad, indent, path)
            rendered = wrap_with_context_menu(rendered, props, pad)
            return wrap_with_tooltip(rendered, props, pad)

        if kind is NodeKind.ALERT:
            return f"{comments}\n{render_alert(props, tag, attrs, pad)}"

        if kind is NodeKind.ACCORDION:
            return f"{comments}\n{render_accordion(props, tag, attrs, pad)}"

        if kind is NodeKind.TABLE:
            return f"{comments}\n{render_table(props, tag, attrs, pad)}"

        if kind in _SELF_CLOSING:
            return f"{comments}\n{pad}<{tag}{attrs} />"

        if kind in _SELF_CLOSING_INPUTS:
            rendered = f"{comments}\n{pad}<{tag}{attrs} />"
            return wrap_with_tooltip(rendered, props, pad, props.get("tooltipTrigger"))

        children = self.render_children(node, indent + 1, path) if policy.is_container else []

        if policy.is_container and children:
            inner = "\n".join(children)
            rendered = f"{comments}\n{pad}<{tag}{class_attr}{style_attr}>\n{inner}\n{pad}</{tag}>"
            return wrap_with_context_menu(rendered, props, pad)

        if text_content:
            rendered = (
                f"{comments}\n{pad}<{tag}{props_str}{class_attr}{toast_click}{style_attr}>"
                f"{escape_jsx(str(text_content))}</{tag}>"
            )
            if kind is NodeKind.BUTTON:
                rendered = wrap_with_overlay(rendered, props, pad)
                rendered = wrap_with_tooltip(rendered, props, pad)
            elif kind in _TOOLTIP_TEXT_KINDS:
                rendered = wrap_with_tooltip(rendered, props, pad)
            return rendered

        if policy.is_container:
            rendered = f"{comments}\n{pad}<{tag}{class_attr}{style_attr} />"
            return wrap_with_context_menu(rendered, props, pad)

        rendered = f"{comments}\n{pad}<{tag}{props_str}{class_attr}{toast_click}{style_attr} />"
        if kind is NodeKind.BUTTON:
            rendered = wrap_with_overlay(rendered, props, pad)
            rendered = wrap_with_tooltip(rendered, props, pad)
        return rendered

    def _render_card(
        self,
        node: CraftNode,
        tag: str,
        attrs: str,
        comments: str,
        pad: str,
        indent: int,
        path: tuple[str, ...],
    ) -> str:
        title = node.props.get("title") or ""
        description = node.props.get("description") or ""
        children = self.render_children(node, indent + 3, path)

        body: list[str] = []
        if title:
            body.append(f'{pad}    <div className="p-6">')
            body.append(f'{pad}      <h3 className="text-lg font-semibold">{escape_jsx(str(title))}</h3>')
            if description:
                body.append(f'{pad}      <p className="text-sm text-muted-foreground">{escape_jsx(str(description))}</p>')
            body.append(f"{pad}    </div>")
        if children:
            body.append(f'{pad}    <div className="p-6 pt-0">')
            body.extend(children)
            body.append(f"{pad}    </div>")

        if not body:
            return f"{comments}\n{pad}<{tag}{attrs} />"
        return f"{comments}\n{pad}<{tag}{attrs}>\n" + "\n".join(body) + f"\n{pad}</{tag}>"


# ---------------------------------------------------------------------------
# Structural renderers
# ---------------------------------------------------------------------------


def render_table(props: dict[str, Any], tag: str, attrs: str, pad: str) -> str:
    """
    Static table from encoded props. Children are ignored.
    columns: "A,B,C"   rows: "a1,b1,c1;a2,b2,c2"
    """
    columns = [c.strip() for c in str(props.get("columns") or "Name,Email,Role").split(",")]
    rows_str = str(props.get("rows") or "")
    rows = [[c.strip() for c in row.split(",")] for row in rows_str.split(";")] if rows_str else []
    has_header = props.get("hasHeader") is not False

    lines = [f"{pad}<{tag}{attrs}>"]
    if has_header:
        lines.append(f"{pad}  <thead>")
        lines.append(f"{pad}    <tr>")
        lines.extend(f"{pad}      <th>{escape_jsx(col)}</th>" for col in columns)
        lines.append(f"{pad}    </tr>")
        lines.append(f"{pad}  </thead>")
    if rows:
        lines.append(f"{pad}  <tbody>")
        for row in rows:
            lines.append(f"{pad}    <tr>")
            lines.extend(f"{pad}      <td>{escape_jsx(cell)}</td>" for cell in row)
            lines.append(f"{pad}    </tr>")
        lines.append(f"{pad}  </tbody>")
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


def render_accordion(props: dict[str, Any], tag: str, attrs: str, pad: str) -> str:
    items = [s.strip() for s in str(props.get("items") or "Item 1,Item 2,Item 3").split(",")]
    linked_paths = [s.strip() for s in str(props.get("linkedMocPaths") or "").split(",")]
    collapsible = " collapsible" if (props.get("type") or "single") == "single" else ""

    lines = [f"{pad}<{tag}{attrs}{collapsible}>"]
    for i, label in enumerate(items):
        moc_path = linked_paths[i] if i < len(linked_paths) else ""
        lines.append(f'{pad}  <AccordionItem value="item-{i + 1}">')
        lines.append(f"{pad}    <AccordionTrigger>{escape_jsx(label)}</AccordionTrigger>")
        lines.append(f"{pad}    <AccordionContent>")
        if moc_path:
            lines.append(f"{pad}      {{/* linked: {escape_jsx(moc_path)} */}}")
        else:
            lines.append(f"{pad}      <p>{escape_jsx(label)} content</p>")
        lines.append(f"{pad}    </AccordionContent>")
        lines.append(f"{pad}  </AccordionItem>")
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


def render_alert(props: dict[str, Any], tag: str, attrs: str, pad: str) -> str:
    title = props.get("title") or ""
    description = props.get("description") or ""
    icon = props.get("icon") or "AlertCircle"

    lines = [f"{pad}<{tag}{attrs}>", f'{pad}  <{icon} className="h-4 w-4" />']
    if title:
        lines.append(f'{pad}  <h5 className="mb-1 font-medium leading-none tracking-tight">{escape_jsx(str(title))}</h5>')
    if description:
        lines.append(f'{pad}  <div className="text-sm [&_p]:leading-relaxed">{escape_jsx(str(description))}</div>')
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Wrappers
# ---------------------------------------------------------------------------


def wrap_with_tooltip(rendered: str, props: dict[str, Any], pad: str, trigger: str | None = None) -> str:
    tooltip_text = props.get("tooltipText")
    if not tooltip_text:
        return rendered

    side = props.get("tooltipSide")
    side_attr = f' side="{escape_attr(str(side))}"' if side else ""
    trigger_tag = '<TooltipTrigger asChild trigger="focus">' if trigger == "focus" else "<TooltipTrigger asChild>"
    return "\n".join(
        [
            f"{pad}<TooltipProvider>",
            f"{pad}  <Tooltip>",
            f"{pad}    {trigger_tag}",
            rendered,
            f"{pad}    </TooltipTrigger>",
            f"{pad}    <TooltipContent{side_attr}>",
            f"{pad}      <p>{escape_jsx(str(tooltip_text))}</p>",
            f"{pad}    </TooltipContent>",
            f"{pad}  </Tooltip>",
            f"{pad}</TooltipProvider>",
        ]
    )


def wrap_with_overlay(rendered: str, props: dict[str, Any], pad: str) -> str:
    """Wrap a CraftButton in the overlay named by overlayType."""
    overlay_type = props.get("overlayType") or "none"
    tags = _OVERLAY_TAGS.get(overlay_type)
    if tags is None:
        return rendered
    root_tag, trigger_tag, content_tag = tags

    linked = props.get("linkedMocPath")
    content_comment = f"{{/* linked: {escape_jsx(str(linked))} */}}" if linked else "{/* overlay content */}"

    style_parts: list[str] = []
    if props.get("overlayWidth"):
        style_parts.append(f'maxWidth: "{escape_js_string(str(props["overlayWidth"]))}"')
    if props.get("overlayHeight"):
        style_parts.append(f'maxHeight: "{escape_js_string(str(props["overlayHeight"]))}", overflow: "auto"')
    style_attr = f" style={{{{ {', '.join(style_parts)} }}}}" if style_parts else ""

    overlay_class = props.get("overlayClassName")
    class_attr = f' className="{escape_attr(str(overlay_class))}"' if overlay_class else ""

    side_attr = ""
    if overlay_type == "sheet":
        side = props.get("sheetSide") or "right"
        side_attr = f' side="{escape_attr(str(side))}"' if side != "right" else ""

    content = [f"{pad}    {content_comment}"]
    if overlay_type == "alert-dialog":
        content.append(f"{pad}    <AlertDialogCancel>Cancel</AlertDialogCancel>")
        content.append(f"{pad}    <AlertDialogAction>Continue</AlertDialogAction>")

    return "\n".join(
        [
            f"{pad}<{root_tag}>",
            f"{pad}  <{trigger_tag} asChild>",
            rendered,
            f"{pad}  </{trigger_tag}>",
            f"{pad}  <{content_tag}{side_attr}{class_attr}{style_attr}>",
            *content,
            f"{pad}  </{content_tag}>",
            f"{pad}</{root_tag}>",
        ]
    )


def wrap_with_context_menu(rendered: str, props: dict[str, Any], pad: str) -> str:
    moc_path = props.get("contextMenuMocPath")
    if not moc_path:
        return rendered
    return "\n".join(
        [
            f"{pad}<ContextMenu>",
            f"{pad}  <ContextMenuTrigger asChild>",
            rendered,
            f"{pad}  </ContextMenuTrigger>",
            f"{pad}  <ContextMenuContent>",
            f"{pad}    {{/* linked: {escape_jsx(str(moc_path))} */}}",
            f"{pad}  </ContextMenuContent>",
            f"{pad}</ContextMenu>",
        ]
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _toast_on_click(props: dict[str, Any]) -> str:
    toast_text = props.get("toastText")
    if not toast_text:
        return ""
    message = escape_js_string(str(toast_text))
    position = props.get("toastPosition") or "bottom-right"
    if position != "bottom-right":
        return f' onClick={{() => toast("{message}", {{ position: "{escape_js_string(str(position))}" }})}}'
    return f' onClick={{() => toast("{message}")}}'


def _join_classes(*classes: str) -> str:
    return " ".join(c for c in classes if c)


def _class_attr(class_name: str) -> str:
    return f' className="{escape_attr(class_name)}"' if class_name else ""


def _comment_safe(text: str) -> str:
    # A literal */ would close the JSX comment early
    return text.replace("*/", "*\\/")
