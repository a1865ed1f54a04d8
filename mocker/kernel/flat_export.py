"""
Flat TSX export: a .moc file reduced to plain TSX for AI agents.
Metadata becomes a short header, memos become inline @ai-memo comments,
and the editor-data block is dropped.
"""

from __future__ import annotations

from mocker.kernel.parser import parse_moc_file


def generate_flat_tsx(content: str) -> str:
    doc = parse_moc_file(content)
    meta = doc.metadata
    lines = [
        "/**",
        " * Mocker Flat TSX Export",
        " * Generated for AI agent consumption",
        " *",
        f" * Intent: {meta.intent}",
        f" * Theme: {meta.theme}",
        f" * Layout: {meta.layout}",
        f" * Viewport: {meta.viewport}",
    ]

    if meta.memos:
        lines.append(" *")
        lines.append(" * AI Memos:")
        for memo in meta.memos:
            lines.append(f" *   #{memo.target_id}: {_one_line(memo.text)}")

    lines.append(" */")
    lines.append("")

    if doc.imports.strip():
        lines.append(doc.imports.strip())
        lines.append("")

    if meta.memos:
        for memo in meta.memos:
            lines.append(f"/* @ai-memo #{memo.target_id}: {_one_line(memo.text)} */")
        lines.append("")

    lines.append(doc.tsx_source.strip())
    lines.append("")
    return "\n".join(lines)


def _one_line(text: str) -> str:
    return " ".join(text.splitlines()).replace("*/", "*\\/")
