"""Main entry point for the Mocker CLI."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from mocker import __version__
from mocker.host.bridge import component_name_for, header_memos
from mocker.host.config import settings
from mocker.kernel.compiler import craft_state_to_tsx
from mocker.kernel.flat_export import generate_flat_tsx
from mocker.kernel.parser import extract_component_name, parse_moc_file
from mocker.kernel.serializer import serialize_moc_file
from mocker.kernel.templates import get_template_content, get_templates
from mocker.kernel.types import VIEWPORT_WIDTHS, MocDocument, MocError

logger = logging.getLogger(__name__)

COMMANDS = ("new", "compile", "inspect", "export-flat")


def print_help():
    """Print help message."""
    template_ids = " | ".join(t.id for t in get_templates())
    print(f"""
Mocker CLI v{__version__}

Usage:
  mocker <command> <file.moc> [options]

Commands:
  new <file>          Create a .moc file from a starter template
  compile <file>      Regenerate imports and TSX from the embedded editor data
  inspect <file>      Print metadata and a document summary as JSON
  export-flat <file>  Print the file as plain TSX for AI agents

Options:
  --template ID       Template for 'new' ({template_ids})
  -o, --output PATH   Write 'export-flat' output to a file
  -h, --help          Show this help
  -v, --version       Show version

Environment:
  MOCKER_LOG_LEVEL               Log level (default: WARNING)
  MOCKER_DEFAULT_COMPONENT_NAME  Component name fallback (default: MockPage)
  MOCKER_DEFAULT_TEMPLATE        Template for 'new' (default: empty)

Examples:
  mocker new LoginPage.moc --template login-form
  mocker compile LoginPage.moc
  mocker export-flat LoginPage.moc -o LoginPage.tsx
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None
        path: str | None
        template: str | None
        output: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "path": None,
        "template": None,
        "output": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in COMMANDS and result["command"] is None:
            result["command"] = arg
        elif arg == "--template":
            if i + 1 < len(args):
                result["template"] = args[i + 1]
                i += 1
            else:
                print("Error: --template requires a template ID")
                sys.exit(1)
        elif arg in ("--output", "-o"):
            if i + 1 < len(args):
                result["output"] = args[i + 1]
                i += 1
            else:
                print("Error: --output requires a path")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'mocker --help' for usage.")
            sys.exit(1)
        elif result["command"] is not None and result["path"] is None:
            result["path"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'mocker --help' for usage.")
            sys.exit(1)

        i += 1

    return result


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_new(path: Path, template_id: str | None) -> None:
    if path.exists():
        raise FileExistsError(f"{path} already exists")
    template_id = template_id or settings.DEFAULT_TEMPLATE
    known = {t.id for t in get_templates()}
    if template_id not in known:
        logger.warning("Unknown template %r, using empty page", template_id)
    path.write_text(get_template_content(template_id, component_name_for(str(path))), encoding="utf-8")
    print(f"Created {path}")


def cmd_compile(path: Path) -> None:
    """Rebuild imports and TSX from the editor data, keeping the header."""
    doc = parse_moc_file(path.read_text(encoding="utf-8"))
    if doc.editor_data is None:
        raise MocError(f"{path} has no editor data to compile")

    name = extract_component_name(doc.tsx_source) or component_name_for(str(path))
    compiled = craft_state_to_tsx(doc.editor_data.craft_state, name, doc.editor_data.memos)
    doc.metadata.memos = header_memos(doc.editor_data.memos)

    updated = MocDocument(
        metadata=doc.metadata,
        imports=compiled.imports,
        tsx_source=compiled.tsx_source,
        editor_data=doc.editor_data,
    )
    path.write_text(serialize_moc_file(updated), encoding="utf-8")
    print(f"Compiled {path}")


def cmd_inspect(path: Path) -> None:
    doc = parse_moc_file(path.read_text(encoding="utf-8"))
    summary = {
        "metadata": doc.metadata.to_dict(),
        "component": extract_component_name(doc.tsx_source),
        "viewportWidth": viewport_width(doc.metadata.viewport),
        "imports": len([line for line in doc.imports.splitlines() if line.startswith("import")]),
        "hasEditorData": doc.editor_data is not None,
        "nodes": len(doc.editor_data.craft_state) if doc.editor_data else 0,
        "editorMemos": len(doc.editor_data.memos) if doc.editor_data else 0,
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))


def viewport_width(viewport: str) -> int | None:
    """Canvas width in pixels for a preset or WxH viewport."""
    if viewport in VIEWPORT_WIDTHS:
        return VIEWPORT_WIDTHS[viewport]
    width, _, height = viewport.partition("x")
    return int(width) if width.isdigit() and height.isdigit() else None


def cmd_export_flat(path: Path, output: str | None) -> None:
    flat = generate_flat_tsx(path.read_text(encoding="utf-8"))
    if output:
        Path(output).write_text(flat, encoding="utf-8")
        print(f"Wrote {output}")
    else:
        sys.stdout.write(flat)


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"mocker {__version__}")
        return

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args["command"] is None:
        print_help()
        sys.exit(1)

    if args["path"] is None:
        print(f"Error: '{args['command']}' requires a file path")
        sys.exit(1)

    path = Path(args["path"])
    try:
        if args["command"] == "new":
            cmd_new(path, args["template"])
        elif args["command"] == "compile":
            cmd_compile(path)
        elif args["command"] == "inspect":
            cmd_inspect(path)
        elif args["command"] == "export-flat":
            cmd_export_flat(path, args["output"])
    except (OSError, MocError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
