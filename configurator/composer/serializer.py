"""Render composed configuration objects as text.

Two output styles exist:

``data``
    Strict JSON with a 2-space indent.  ``RawCode`` values are not allowed
    here and raise ``SerializationError``.

``module``
    A JavaScript object literal (2-space indent, single-quoted strings,
    bare identifier keys) in which ``RawCode`` values are written unquoted,
    so a config object can carry function expressions, ``require`` calls or
    regular expressions.

Each dialect maps to exactly one style (see ``STYLE_BY_DIALECT``).
"""

from __future__ import annotations

import json
import math
import re
from enum import Enum
from typing import Any

from .catalog import Dialect
from .errors import SerializationError, UnknownDialectError
from .values import RawCode, contains_code


class Style(str, Enum):
    DATA = "data"
    MODULE = "module"


STYLE_BY_DIALECT: dict[Dialect, Style] = {
    Dialect.WEBPACK: Style.MODULE,
    Dialect.BABEL: Style.MODULE,
    Dialect.SNOWPACK: Style.DATA,
}

INDENT = "  "

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def to_json(obj: Any) -> str:
    """Serialize *obj* as indented JSON (the ``data`` style)."""
    if contains_code(obj):
        raise SerializationError("RawCode values cannot be rendered as JSON data")
    return json.dumps(obj, indent=2, ensure_ascii=False)


def to_module(obj: Any) -> str:
    """Serialize *obj* as a JavaScript literal (the ``module`` style)."""
    return _render(obj, 0)


def serialize(obj: Any, dialect: Dialect | str) -> str:
    """Serialize *obj* in the style registered for *dialect*."""
    try:
        style = STYLE_BY_DIALECT[Dialect(dialect)]
    except (KeyError, ValueError):
        raise UnknownDialectError(str(dialect)) from None
    if style is Style.DATA:
        return to_json(obj)
    return to_module(obj)


def quote(value: str) -> str:
    """Return *value* as a single-quoted JavaScript string literal."""
    escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in value)
    return f"'{escaped}'"


def render_code(code: RawCode) -> str:
    """Emit a ``RawCode`` payload verbatim, escaping double quotes."""
    return code.text.replace('"', '\\"')


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _render(value: Any, depth: int) -> str:
    if isinstance(value, RawCode):
        return render_code(value)
    if value is None:
        return "null"
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, dict):
        return _render_object(value, depth)
    if isinstance(value, (list, tuple)):
        return _render_array(value, depth)
    raise SerializationError(
        f"Object of type {type(value).__name__} cannot be rendered as a literal"
    )


def _render_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _render_key(key: Any) -> str:
    key = str(key)
    if _IDENTIFIER_RE.fullmatch(key):
        return key
    return quote(key)


def _render_object(value: dict[Any, Any], depth: int) -> str:
    if not value:
        return "{}"
    inner = INDENT * (depth + 1)
    entries = [
        f"{inner}{_render_key(k)}: {_render(v, depth + 1)}" for k, v in value.items()
    ]
    return "{\n" + ",\n".join(entries) + "\n" + INDENT * depth + "}"


def _render_array(value: list[Any] | tuple[Any, ...], depth: int) -> str:
    if not value:
        return "[]"
    inner = INDENT * (depth + 1)
    items = [f"{inner}{_render(v, depth + 1)}" for v in value]
    return "[\n" + ",\n".join(items) + "\n" + INDENT * depth + "]"
