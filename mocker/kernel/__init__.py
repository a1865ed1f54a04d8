"""
Mocker Kernel — the pure .moc codec.

Components:
  registry    — node kind → render policy + documented prop defaults
  compiler    — craft state → {imports, tsx_source}  (pure, deterministic)
  parser      — .moc text → MocDocument  (total, never raises on text)
  serializer  — MocDocument → .moc text  (inverse of the parser)

Helpers:
  update_metadata_field, extract_component_name, generate_flat_tsx,
  get_templates, get_template_content
"""

from mocker.kernel.compiler import craft_state_to_tsx
from mocker.kernel.flat_export import generate_flat_tsx
from mocker.kernel.parser import extract_component_name, parse_moc_file
from mocker.kernel.registry import defaults_for, policy_for, resolve_kind
from mocker.kernel.serializer import serialize_moc_file, update_metadata_field
from mocker.kernel.templates import get_template_content, get_templates

__all__ = [
    "craft_state_to_tsx",
    "parse_moc_file",
    "serialize_moc_file",
    "update_metadata_field",
    "extract_component_name",
    "generate_flat_tsx",
    "policy_for",
    "defaults_for",
    "resolve_kind",
    "get_templates",
    "get_template_content",
]
