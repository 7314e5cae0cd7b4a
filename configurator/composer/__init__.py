"""Feature composition: fold selected features into build-tool configs.

Quick usage::

    from configurator.composer import Configurator
    from configurator.features import default_catalog

    configurator = Configurator(default_catalog())
    print(configurator.webpack_config(["react", "babel"]))
"""

from configurator.composer.assemblers import (
    Configurator,
    GeneratedProject,
    create_additional_files_map,
    create_babel_config,
    create_snowpack_config,
    create_webpack_config,
    get_default_project_name,
    get_package_json,
    get_webpack_imports,
)
from configurator.composer.catalog import (
    CatalogBase,
    Dialect,
    Feature,
    FeatureCatalog,
    passthrough,
)
from configurator.composer.dependencies import (
    collect_dependencies,
    resolve_dependencies,
    resolve_versions,
)
from configurator.composer.errors import (
    ConfiguratorError,
    SerializationError,
    UnknownDialectError,
    UnknownFeatureError,
    VersionLookupError,
)
from configurator.composer.reducer import deep_merge, entry_point, reduce_config
from configurator.composer.serializer import serialize, to_json, to_module
from configurator.composer.templates import DEFAULT_TEMPLATES, TemplateRenderer, Templates
from configurator.composer.values import RawCode, is_marked, mark

__all__ = [
    "CatalogBase",
    "Configurator",
    "ConfiguratorError",
    "DEFAULT_TEMPLATES",
    "Dialect",
    "Feature",
    "FeatureCatalog",
    "GeneratedProject",
    "RawCode",
    "SerializationError",
    "TemplateRenderer",
    "Templates",
    "UnknownDialectError",
    "UnknownFeatureError",
    "VersionLookupError",
    "collect_dependencies",
    "create_additional_files_map",
    "create_babel_config",
    "create_snowpack_config",
    "create_webpack_config",
    "deep_merge",
    "entry_point",
    "get_default_project_name",
    "get_package_json",
    "get_webpack_imports",
    "is_marked",
    "mark",
    "passthrough",
    "reduce_config",
    "resolve_dependencies",
    "resolve_versions",
    "serialize",
    "to_json",
    "to_module",
]
