"""Assemble the artifacts of a generated project.

Thin composers over the reducer and serializer:

* ``create_webpack_config`` -- imports, the serialized config object and the
  ``module.exports`` statement.
* ``create_babel_config`` -- the ``.babelrc`` text, or ``None`` when no
  feature contributes anything.
* ``create_snowpack_config`` -- JSON text.
* ``create_additional_files_map`` -- extra source files keyed by path.
* ``get_package_json`` -- the final ``package.json`` object with resolved
  dependency versions.

``Configurator`` binds a catalog and templates and writes a whole project to
disk.  Everything except ``Configurator.write`` is free of I/O.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from configurator.utils import console, dump_json, kebab_case, write_text

from .catalog import Dialect, FeatureCatalog, Selection
from .dependencies import VersionLookup, collect_dependencies, resolve_dependencies
from .reducer import deep_merge, reduce_config
from .serializer import serialize
from .templates import DEFAULT_TEMPLATES, TemplateRenderer, Templates

# Content hashes break webpack's hot-reload file watching.
HOT_RELOAD_FILENAME = "[name].[hash].js"

EMPTY_BABEL_CONFIG = "{}"

# Filled in last; never taken from a feature fragment.
_PACKAGE_JSON_OVERRIDES = ("name", "dependencies", "devDependencies")


@lru_cache(maxsize=1)
def _default_renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def get_default_project_name(name: str, features: Selection) -> str:
    """Derive a project name from a base *name* and the selected features.

    Example::

        get_default_project_name("empty-project", ["typescript", "react"])
        -> "empty-project-react-typescript"
    """
    return f"{name}-{kebab_case(sorted(features))}"


# ---------------------------------------------------------------------------
# Build-tool configs
# ---------------------------------------------------------------------------


def get_webpack_imports(selection: Selection, catalog: FeatureCatalog) -> list[str]:
    """Concatenate the import lines of every selected feature, in order."""
    imports: list[str] = []
    for feature_id in selection:
        imports.extend(catalog.get(feature_id).webpack_imports)
    return imports


def needs_hot_reload_export(selection: Selection) -> bool:
    """True when hashed chunk names must be switched off under ``--hot``."""
    return "code-split-vendors" in selection and "react-hot-loader" in selection


def create_webpack_config(
    selection: Selection,
    catalog: FeatureCatalog,
    templates: Templates = DEFAULT_TEMPLATES,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render ``webpack.config.js`` for *selection*."""
    renderer = renderer or _default_renderer()
    config = reduce_config(selection, Dialect.WEBPACK, catalog, templates)
    imports = [*templates.webpack_imports, *get_webpack_imports(selection, catalog)]
    return renderer.render(
        "webpack.config.js.j2",
        {
            "imports": imports,
            "config": config,
            "hot_reload_filename": (
                HOT_RELOAD_FILENAME if needs_hot_reload_export(selection) else None
            ),
        },
    )


def create_babel_config(
    selection: Selection,
    catalog: FeatureCatalog,
    templates: Templates = DEFAULT_TEMPLATES,
) -> str | None:
    """Render ``.babelrc`` for *selection*, or ``None`` if it would be empty."""
    config = reduce_config(selection, Dialect.BABEL, catalog, templates)
    text = serialize(config, Dialect.BABEL)
    return None if text == EMPTY_BABEL_CONFIG else text


def create_snowpack_config(
    selection: Selection,
    catalog: FeatureCatalog,
    templates: Templates = DEFAULT_TEMPLATES,
) -> str:
    """Render ``snowpack.config.json`` for *selection*."""
    config = reduce_config(selection, Dialect.SNOWPACK, catalog, templates)
    return serialize(config, Dialect.SNOWPACK)


# ---------------------------------------------------------------------------
# Auxiliary files and package.json
# ---------------------------------------------------------------------------


def create_additional_files_map(
    selection: Selection, catalog: FeatureCatalog
) -> dict[str, str]:
    """Collect extra source files, later features overriding earlier ones."""
    selection = list(selection)
    files = catalog.base.generate_files(selection)
    for feature_id in selection:
        files.update(catalog.get(feature_id).generate_files(selection))
    return files


def create_package_json_config(
    selection: Selection, catalog: FeatureCatalog
) -> dict[str, Any]:
    """Deep-merge the ``package.json`` fragments of every selected feature."""
    merged: dict[str, Any] = {}
    for feature_id in selection:
        deep_merge(merged, catalog.get(feature_id).package_json)
    return merged


async def get_package_json(
    selection: Selection,
    catalog: FeatureCatalog,
    name: str,
    lookup: VersionLookup,
    templates: Templates = DEFAULT_TEMPLATES,
    *,
    max_concurrency: int | None = None,
) -> dict[str, Any]:
    """Build the final ``package.json`` object for *selection*.

    Static base, catalog base and feature fragments are deep-merged in that
    order; ``name``, ``dependencies`` and ``devDependencies`` are set last
    and always win.

    Raises:
        UnknownFeatureError: A selected id is not in *catalog*.
        VersionLookupError: Any version lookup failed.
    """
    selection = list(selection)
    names = collect_dependencies(selection, catalog)
    fragments = create_package_json_config(selection, catalog)
    resolved = await resolve_dependencies(names, lookup, max_concurrency=max_concurrency)

    merged = deep_merge({}, templates.package_json, catalog.base.package_json, fragments)
    return {
        "name": name,
        **{k: v for k, v in merged.items() if k not in _PACKAGE_JSON_OVERRIDES},
        "dependencies": resolved.dependencies,
        "devDependencies": resolved.dev_dependencies,
    }


# ---------------------------------------------------------------------------
# Project façade
# ---------------------------------------------------------------------------


class GeneratedProject(BaseModel):
    """All artifacts of one generated project, still in memory."""

    name: str
    package_json: dict[str, Any] = Field(default_factory=dict)
    files: dict[str, str] = Field(
        default_factory=dict,
        description="Relative path -> file content, package.json excluded",
    )

    def all_files(self) -> dict[str, str]:
        """Return every file including the serialized ``package.json``."""
        return {"package.json": dump_json(self.package_json), **self.files}


class Configurator:
    """Composes projects from a fixed catalog and set of templates.

    Quick usage::

        configurator = Configurator(default_catalog())
        project = await configurator.build(["react", "babel"], lookup=client.get_version)
        await configurator.write(project, "./output")
    """

    def __init__(
        self,
        catalog: FeatureCatalog,
        templates: Templates = DEFAULT_TEMPLATES,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.catalog = catalog
        self.templates = templates
        self.renderer = renderer or _default_renderer()

    # -- Pure composition ---------------------------------------------------

    def webpack_config(self, selection: Selection) -> str:
        return create_webpack_config(selection, self.catalog, self.templates, self.renderer)

    def babel_config(self, selection: Selection) -> str | None:
        return create_babel_config(selection, self.catalog, self.templates)

    def snowpack_config(self, selection: Selection) -> str:
        return create_snowpack_config(selection, self.catalog, self.templates)

    def additional_files(self, selection: Selection) -> dict[str, str]:
        return create_additional_files_map(selection, self.catalog)

    async def package_json(
        self,
        selection: Selection,
        name: str,
        lookup: VersionLookup,
        *,
        max_concurrency: int | None = None,
    ) -> dict[str, Any]:
        return await get_package_json(
            selection,
            self.catalog,
            name,
            lookup,
            self.templates,
            max_concurrency=max_concurrency,
        )

    async def build(
        self,
        selection: Selection,
        lookup: VersionLookup,
        *,
        name: str | None = None,
        bundler: Dialect | str = Dialect.WEBPACK,
        max_concurrency: int | None = None,
    ) -> GeneratedProject:
        """Compose every artifact for *selection*.

        Args:
            selection: Ordered feature ids.
            lookup: Async ``package name -> version`` function.
            name: Project name; derived from the selection when omitted.
            bundler: ``webpack`` or ``snowpack``.
            max_concurrency: Upper bound on parallel version lookups.
        """
        selection = list(selection)
        bundler = Dialect.parse(bundler)
        self.catalog.validate_selection(selection)
        if name is None:
            name = get_default_project_name(
                self.templates.package_json.get("name", "empty-project"), selection
            )

        files: dict[str, str] = {}
        if bundler is Dialect.SNOWPACK:
            files["snowpack.config.json"] = self.snowpack_config(selection) + "\n"
        else:
            files["webpack.config.js"] = self.webpack_config(selection) + "\n"
        if self.catalog.supports(Dialect.BABEL):
            babel = self.babel_config(selection)
            if babel is not None:
                files[".babelrc"] = babel + "\n"
        files.update(self.additional_files(selection))

        package_json = await self.package_json(
            selection, name, lookup, max_concurrency=max_concurrency
        )
        return GeneratedProject(name=name, package_json=package_json, files=files)

    # -- Disk output --------------------------------------------------------

    async def write(self, project: GeneratedProject, output_dir: str | Path) -> list[Path]:
        """Write *project* under ``<output_dir>/<project.name>``.

        Returns:
            The written file paths, ``package.json`` first.
        """
        root = Path(output_dir) / project.name
        written: list[Path] = []
        for relative, content in project.all_files().items():
            written.append(await write_text(root / relative, content))
        console.print(f"  [dim]Wrote {len(written)} files to {root}[/dim]")
        return written
