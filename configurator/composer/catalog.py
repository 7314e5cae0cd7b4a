"""Feature catalog: the table of selectable features and what each contributes.

A ``Feature`` bundles one transform per output ``Dialect`` together with the
npm packages, webpack import lines, ``package.json`` fragment and extra files
it brings into a project.  A ``FeatureCatalog`` maps feature ids to features
and checks at construction time that every feature covers every dialect the
catalog declares, so a missing transform is reported up front instead of in
the middle of a fold.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import UnknownDialectError, UnknownFeatureError

Selection = Sequence[str]
Transform = Callable[[Any, Selection], Any]
NameList = Sequence[str] | Callable[[Selection], Sequence[str]]
FileGenerator = Callable[[Selection], dict[str, str]]


class Dialect(str, Enum):
    """Output targets a configuration can be composed for."""

    WEBPACK = "webpack"
    BABEL = "babel"
    SNOWPACK = "snowpack"

    @classmethod
    def parse(cls, value: Dialect | str) -> Dialect:
        """Return the ``Dialect`` for *value* or raise ``UnknownDialectError``."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownDialectError(str(value)) from None


def passthrough(config: Any, selection: Selection) -> Any:
    """Transform that leaves the configuration untouched."""
    return config


def _no_files(selection: Selection) -> dict[str, str]:
    return {}


def _names(names: NameList, selection: Selection) -> list[str]:
    if callable(names):
        return list(names(selection))
    return list(names)


# ---------------------------------------------------------------------------
# Feature descriptors
# ---------------------------------------------------------------------------


@dataclass
class Feature:
    """Everything a single selectable feature contributes to a project.

    ``dependencies`` and ``dev_dependencies`` are either plain lists of npm
    package names or callables receiving the full selection, for features
    whose packages depend on what else was picked (TypeScript pulls in
    ``@types/react`` only alongside React).
    """

    transforms: dict[Dialect, Transform]
    dependencies: NameList = ()
    dev_dependencies: NameList = ()
    webpack_imports: list[str] = field(default_factory=list)
    package_json: dict[str, Any] = field(default_factory=dict)
    files: FileGenerator = _no_files
    group: str = ""

    def __post_init__(self) -> None:
        self.transforms = {
            Dialect.parse(dialect): fn for dialect, fn in self.transforms.items()
        }

    def transform_for(self, dialect: Dialect) -> Transform | None:
        return self.transforms.get(dialect)

    def dependency_names(self, selection: Selection) -> list[str]:
        return _names(self.dependencies, selection)

    def dev_dependency_names(self, selection: Selection) -> list[str]:
        return _names(self.dev_dependencies, selection)

    def generate_files(self, selection: Selection) -> dict[str, str]:
        return dict(self.files(selection))


@dataclass
class CatalogBase:
    """Contributions every project gets, regardless of the selection."""

    dependencies: NameList = ()
    dev_dependencies: NameList = ()
    package_json: dict[str, Any] = field(default_factory=dict)
    files: FileGenerator = _no_files

    def dependency_names(self, selection: Selection) -> list[str]:
        return _names(self.dependencies, selection)

    def dev_dependency_names(self, selection: Selection) -> list[str]:
        return _names(self.dev_dependencies, selection)

    def generate_files(self, selection: Selection) -> dict[str, str]:
        return dict(self.files(selection))


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class FeatureCatalog:
    """Validated mapping of feature id to ``Feature``.

    Args:
        features: Feature descriptors keyed by id.  Iteration order is kept.
        base: Contributions shared by every project.
        dialects: Dialects every feature must provide a transform for.

    Raises:
        UnknownDialectError: If a feature lacks a transform for one of
            *dialects*.
    """

    def __init__(
        self,
        features: Mapping[str, Feature],
        base: CatalogBase | None = None,
        dialects: Sequence[Dialect | str] = (Dialect.WEBPACK, Dialect.BABEL),
    ) -> None:
        self.dialects: tuple[Dialect, ...] = tuple(Dialect.parse(d) for d in dialects)
        self.base = base or CatalogBase()
        self._features: dict[str, Feature] = dict(features)

        for feature_id, feature in self._features.items():
            for dialect in self.dialects:
                if feature.transform_for(dialect) is None:
                    raise UnknownDialectError(dialect.value, feature_id)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def __iter__(self) -> Iterator[str]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def ids(self) -> list[str]:
        return list(self._features)

    def get(self, feature_id: str) -> Feature:
        """Return the feature registered as *feature_id*."""
        try:
            return self._features[feature_id]
        except KeyError:
            raise UnknownFeatureError(feature_id) from None

    def supports(self, dialect: Dialect | str) -> bool:
        return Dialect.parse(dialect) in self.dialects

    def transform(self, feature_id: str, dialect: Dialect | str) -> Transform:
        """Look up the transform of *feature_id* for *dialect*.

        Raises:
            UnknownFeatureError: If *feature_id* is not in the catalog.
            UnknownDialectError: If *dialect* is unknown or not provided by
                the feature.
        """
        dialect = Dialect.parse(dialect)
        feature = self.get(feature_id)
        fn = feature.transform_for(dialect)
        if fn is None:
            raise UnknownDialectError(dialect.value, feature_id)
        return fn

    def validate_selection(self, selection: Selection) -> None:
        """Raise ``UnknownFeatureError`` for the first unknown id in *selection*."""
        for feature_id in selection:
            self.get(feature_id)
