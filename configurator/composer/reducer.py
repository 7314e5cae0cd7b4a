"""Fold a feature selection over a base configuration object.

``reduce_config`` is the single composition algorithm behind every dialect:
it starts from a fresh copy of the dialect's base template and calls each
selected feature's transform left to right, threading the accumulator and
the whole selection through.  Transforms may inspect sibling ids in the
selection, so the fold order is kept exactly as given.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .catalog import Dialect, FeatureCatalog, Selection
from .templates import DEFAULT_TEMPLATES, Templates

HOT_LOADER_PATCH = "react-hot-loader/patch"


def entry_extension(selection: Selection) -> str:
    """Pick the source extension of the webpack entry module."""
    if "typescript" in selection:
        return "tsx" if "react" in selection else "ts"
    return "js"


def entry_point(selection: Selection) -> str | list[str]:
    """Return the webpack ``entry`` value for *selection*.

    With ``react-hot-loader`` selected the hot-loader patch module is
    activated before the application entry.
    """
    entry = f"./src/index.{entry_extension(selection)}"
    if "react-hot-loader" in selection:
        return [HOT_LOADER_PATCH, entry]
    return entry


def reduce_config(
    selection: Selection,
    dialect: Dialect | str,
    catalog: FeatureCatalog,
    templates: Templates = DEFAULT_TEMPLATES,
) -> Any:
    """Compose the configuration object of *dialect* for *selection*.

    Args:
        selection: Ordered feature ids.
        dialect: Target dialect (``webpack``, ``babel`` or ``snowpack``).
        catalog: Feature catalog supplying the transforms.
        templates: Base objects to start from.

    Returns:
        The accumulator returned by the last transform (the base copy when
        the selection is empty).

    Raises:
        UnknownFeatureError: A selected id is not in *catalog*.
        UnknownDialectError: *dialect* is unknown or a selected feature has
            no transform for it.
    """
    dialect = Dialect.parse(dialect)
    selection = list(selection)
    # Resolve every transform before running any, so a bad id fails fast.
    transforms = [catalog.transform(feature_id, dialect) for feature_id in selection]

    config = templates.base_for(dialect)
    if dialect is Dialect.WEBPACK:
        config["entry"] = entry_point(selection)

    for transform in transforms:
        config = transform(config, selection)
    return config


def deep_merge(target: dict[str, Any], *sources: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge *sources* into *target* and return it.

    Nested mappings are merged key by key; any other value (lists included)
    from a later source replaces the earlier one.  Values taken from
    *sources* are deep-copied so the result never aliases them.
    """
    for source in sources:
        for key, value in source.items():
            current = target.get(key)
            if isinstance(current, dict) and isinstance(value, Mapping):
                deep_merge(current, value)
            elif isinstance(value, Mapping):
                target[key] = deep_merge({}, value)
            else:
                target[key] = copy.deepcopy(value)
    return target
