"""Literal source code carried inside configuration objects.

Configuration objects are plain nested dicts/lists of JSON-like data.  A
feature that needs executable syntax in the rendered file (a function
expression, a ``require`` call, a regular expression) wraps the text in
``RawCode``.  The module serializer emits such values unquoted; the data
serializer rejects them.

Example::

    config["output"]["path"] = mark("path.resolve(__dirname, 'dist')")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RawCode:
    """A fragment of source code to be emitted verbatim."""

    text: str

    def __str__(self) -> str:
        return self.text


def mark(code: str) -> RawCode:
    """Tag *code* as literal source rather than a string value."""
    if isinstance(code, RawCode):
        return code
    return RawCode(code)


def is_marked(value: Any) -> bool:
    """Return ``True`` if *value* was produced by :func:`mark`."""
    return isinstance(value, RawCode)


def contains_code(value: Any) -> bool:
    """Return ``True`` if *value* holds a ``RawCode`` anywhere in its tree."""
    if isinstance(value, RawCode):
        return True
    if isinstance(value, dict):
        return any(contains_code(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(contains_code(v) for v in value)
    return False
