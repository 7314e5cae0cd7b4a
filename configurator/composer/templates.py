"""Base templates and Jinja2 rendering for generated config files.

``Templates`` holds the static starting objects each dialect is folded over
(plus the base ``package.json`` and the import lines every webpack config
starts with).  ``TemplateRenderer`` loads the ``.j2`` files under
``configurator/composer/templates/`` that lay out the final webpack module.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .catalog import Dialect
from .errors import UnknownDialectError
from .serializer import quote, to_module
from .values import mark


# ---------------------------------------------------------------------------
# Base templates
# ---------------------------------------------------------------------------


def _base_webpack() -> dict[str, Any]:
    return {
        "entry": "./src/index.js",
        "output": {
            "path": mark("path.resolve(__dirname, 'dist')"),
            "filename": "bundle.js",
        },
    }


def _base_package_json() -> dict[str, Any]:
    return {
        "name": "empty-project",
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "keywords": [],
        "author": "",
        "license": "ISC",
    }


@dataclass
class Templates:
    """Static starting points for every dialect.

    The objects held here are never handed to a transform directly:
    :meth:`base_for` returns a deep copy, so a fold can mutate its
    accumulator without touching the shared template.
    """

    webpack: dict[str, Any] = field(default_factory=_base_webpack)
    babel: dict[str, Any] = field(default_factory=dict)
    snowpack: dict[str, Any] = field(
        default_factory=lambda: {"mount": {"dist": "/", "src": "/"}}
    )
    webpack_imports: list[str] = field(
        default_factory=lambda: [
            "const webpack = require('webpack');",
            "const path = require('path');",
        ]
    )
    package_json: dict[str, Any] = field(default_factory=_base_package_json)

    def base_for(self, dialect: Dialect | str) -> dict[str, Any]:
        """Return a fresh copy of the base object for *dialect*."""
        dialect = Dialect.parse(dialect)
        base = getattr(self, dialect.value, None)
        if base is None:
            raise UnknownDialectError(dialect.value)
        return copy.deepcopy(base)


DEFAULT_TEMPLATES = Templates()


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 templates that wrap serialized configs.

    Two filters are registered: ``js_module`` renders a config object as a
    JavaScript literal and ``js_string`` single-quotes a Python string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["js_module"] = to_module
        self.env.filters["js_string"] = quote

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"webpack.config.js.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)
