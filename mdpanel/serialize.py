"""Turn panel content and converter options into script-safe text."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

CONTENT_SEPARATOR = "\n\n"


def serialize_content(content: str | Sequence[str] | None) -> str:
    """Normalize content into one string that can sit inside a double-quoted JS literal.

    A sequence is joined with a blank line between entries and loses any
    trailing newlines. Only newlines and double quotes are escaped; a literal
    backslash passes through unchanged.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        text = content
    else:
        text = CONTENT_SEPARATOR.join(content).rstrip("\n")

    text = text.replace("\n", "\\n")
    return text.replace('"', '\\"')


def _literal(value) -> str:
    # Strings come out quoted, booleans and numbers as bare JS literals.
    try:
        return json.dumps(value)
    except TypeError:
        return str(value)


def option_instruction(name: str, value) -> str:
    """One `conv.setOption(name, value);` call with a JS literal value."""
    return f"conv.setOption({json.dumps(str(name))}, {_literal(value)});"


def serialize_options(options: Mapping[str, object]) -> str:
    """Emit one setOption call per entry, in insertion order."""
    return "".join(option_instruction(name, value) for name, value in options.items())
