"""Collect npm dependency names for a selection and resolve their versions.

Names are gathered from the catalog base and then from every selected
feature, in selection order, and deduplicated keeping the first occurrence.
Resolution runs in two phases: every ``dependencies`` lookup settles before
the first ``devDependencies`` lookup is issued.  Lookups inside one phase
run concurrently.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence

from pydantic import BaseModel, Field

from .catalog import FeatureCatalog, Selection
from .errors import ConfiguratorError, VersionLookupError

VersionLookup = Callable[[str], Awaitable[str]]


class DependencyNames(BaseModel):
    """Deduplicated package names, in first-seen order."""

    dependencies: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list)


class ResolvedDependencies(BaseModel):
    """Package name to version mappings, ready for ``package.json``."""

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)


def unique(names: Iterable[str]) -> list[str]:
    """Drop duplicates from *names*, keeping the first occurrence of each."""
    return list(dict.fromkeys(names))


def collect_dependencies(selection: Selection, catalog: FeatureCatalog) -> DependencyNames:
    """Gather the npm packages *selection* needs.

    Raises:
        UnknownFeatureError: A selected id is not in *catalog*.
    """
    selection = list(selection)
    dependencies = catalog.base.dependency_names(selection)
    dev_dependencies = catalog.base.dev_dependency_names(selection)
    for feature_id in selection:
        feature = catalog.get(feature_id)
        dependencies.extend(feature.dependency_names(selection))
        dev_dependencies.extend(feature.dev_dependency_names(selection))
    return DependencyNames(
        dependencies=unique(dependencies),
        dev_dependencies=unique(dev_dependencies),
    )


async def resolve_versions(
    names: Sequence[str],
    lookup: VersionLookup,
    *,
    max_concurrency: int | None = None,
) -> dict[str, str]:
    """Resolve every name in *names* to a version with *lookup*.

    Each name is looked up exactly once; the result keeps the order of
    *names*.  When *max_concurrency* is given, at most that many lookups are
    in flight at a time.

    Raises:
        VersionLookupError: If any lookup fails.  Lookups still in flight
            are cancelled and no partial mapping is returned.
    """
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _one(name: str) -> str:
        try:
            if semaphore is None:
                return await lookup(name)
            async with semaphore:
                return await lookup(name)
        except ConfiguratorError:
            raise
        except Exception as exc:
            raise VersionLookupError(name, str(exc)) from exc

    tasks = [asyncio.ensure_future(_one(name)) for name in names]
    try:
        versions = await asyncio.gather(*tasks)
    except ConfiguratorError:
        # stop the remaining lookups of this phase
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return dict(zip(names, versions))


async def resolve_dependencies(
    names: DependencyNames,
    lookup: VersionLookup,
    *,
    max_concurrency: int | None = None,
) -> ResolvedDependencies:
    """Resolve ``dependencies`` first, then ``devDependencies``."""
    dependencies = await resolve_versions(
        names.dependencies, lookup, max_concurrency=max_concurrency
    )
    dev_dependencies = await resolve_versions(
        names.dev_dependencies, lookup, max_concurrency=max_concurrency
    )
    return ResolvedDependencies(
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
    )
