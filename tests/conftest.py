"""Shared pytest fixtures for the configurator test suite.

Provides reusable fixtures for:
- A small hand-built feature catalog with predictable contributions
- The built-in webpack and snowpack catalogs
- Fake async version lookups that record their calls
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from configurator.composer import (
    CatalogBase,
    Dialect,
    Feature,
    FeatureCatalog,
    passthrough,
)
from configurator.features import default_catalog, snowpack_catalog


# ---------------------------------------------------------------------------
# Fake version lookups
# ---------------------------------------------------------------------------


class RecordingLookup:
    """Async version lookup returning ``^1.0.0`` and recording every call.

    Names listed in *failing* raise ``RuntimeError``.  ``events`` holds
    ``("start", name)`` / ``("end", name)`` pairs so tests can check that
    phases do not interleave.
    """

    def __init__(self, failing: set[str] | None = None, versions: dict[str, str] | None = None) -> None:
        self.failing = failing or set()
        self.versions = versions or {}
        self.calls: list[str] = []
        self.events: list[tuple[str, str]] = []

    async def __call__(self, name: str) -> str:
        self.calls.append(name)
        self.events.append(("start", name))
        await asyncio.sleep(0)
        self.events.append(("end", name))
        if name in self.failing:
            raise RuntimeError(f"registry exploded on {name}")
        return self.versions.get(name, "^1.0.0")


@pytest.fixture
def lookup() -> RecordingLookup:
    return RecordingLookup()


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


def _set(key: str, value: Any):
    def transform(config: dict[str, Any], selection: list[str]) -> dict[str, Any]:
        config[key] = value
        return config

    return transform


def _append(key: str, value: Any):
    def transform(config: dict[str, Any], selection: list[str]) -> dict[str, Any]:
        config.setdefault(key, []).append(value)
        return config

    return transform


@pytest.fixture
def toy_catalog() -> FeatureCatalog:
    """Two-feature catalog: ``alpha`` and ``beta`` with overlapping deps."""
    features = {
        "alpha": Feature(
            transforms={
                Dialect.WEBPACK: _append("order", "alpha"),
                Dialect.BABEL: passthrough,
            },
            dependencies=["x", "y"],
            dev_dependencies=["dev-a"],
            webpack_imports=["const alpha = require('alpha');"],
            package_json={"scripts": {"alpha": "run-alpha"}, "keywords": ["alpha"]},
            files=lambda selection: {"alpha.txt": "alpha", "shared.txt": "from alpha"},
        ),
        "beta": Feature(
            transforms={
                Dialect.WEBPACK: _append("order", "beta"),
                Dialect.BABEL: _set("plugins", ["beta-plugin"]),
            },
            dependencies=["y", "z"],
            dev_dependencies=lambda selection: ["dev-b", "dev-a"],
            webpack_imports=["const beta = require('beta');"],
            package_json={"scripts": {"beta": "run-beta"}, "keywords": ["beta"]},
            files=lambda selection: {"shared.txt": "from beta"},
        ),
    }
    base = CatalogBase(
        dependencies=["base-dep"],
        dev_dependencies=["base-dev"],
        package_json={"license": "MIT", "scripts": {"build": "make"}},
        files=lambda selection: {"README.md": "# readme", "shared.txt": "from base"},
    )
    return FeatureCatalog(features, base)


@pytest.fixture
def webpack_catalog() -> FeatureCatalog:
    return default_catalog()


@pytest.fixture
def snowpack_features() -> FeatureCatalog:
    return snowpack_catalog()


@pytest.fixture
def make_lookup():
    """Factory for ``RecordingLookup`` with custom failures or versions."""
    return RecordingLookup
