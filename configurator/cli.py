"""Command-line entry point.

Usage::

    python -m configurator.cli react babel css
    python -m configurator.cli react typescript --name my-app -o ./projects
    python -m configurator.cli typescript --bundler snowpack --dry-run
    python -m configurator.cli --list
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.table import Table

from configurator.composer import (
    Configurator,
    ConfiguratorError,
    Dialect,
    FeatureCatalog,
    get_default_project_name,
)
from configurator.config import Settings
from configurator.features import default_catalog, snowpack_catalog
from configurator.npm_client import NpmClient
from configurator.utils import (
    console,
    print_error,
    print_file,
    print_success,
    print_summary_table,
)


def catalog_for(bundler: Dialect) -> FeatureCatalog:
    """Return the built-in catalog for *bundler*."""
    if bundler is Dialect.SNOWPACK:
        return snowpack_catalog()
    return default_catalog()


def print_catalog(catalog: FeatureCatalog) -> None:
    """Print the selectable features of *catalog* as a table."""
    table = Table(title="Features", show_header=True, header_style="bold cyan")
    table.add_column("Feature", no_wrap=True)
    table.add_column("Group", style="dim")
    table.add_column("Dependencies")
    for feature_id in catalog:
        feature = catalog.get(feature_id)
        names = feature.dependency_names([feature_id]) + feature.dev_dependency_names(
            [feature_id]
        )
        table.add_row(feature_id, feature.group, ", ".join(names))
    console.print(table)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Generate (or preview) one project; return the process exit code."""
    bundler = Dialect.parse(args.bundler)
    catalog = catalog_for(bundler)
    if args.list:
        print_catalog(catalog)
        return 0

    configurator = Configurator(catalog)
    client = NpmClient(settings.registry_url, timeout=settings.registry_timeout)

    with console.status("Resolving package versions..."):
        project = await configurator.build(
            args.features,
            client.get_version,
            name=args.name or get_default_project_name(settings.project_name, args.features),
            bundler=bundler,
            max_concurrency=settings.max_concurrent_lookups,
        )

    print_summary_table(
        {
            "Project": project.name,
            "Bundler": bundler.value,
            "Features": ", ".join(args.features) or "(none)",
            "Dependencies": str(len(project.package_json["dependencies"])),
            "Dev dependencies": str(len(project.package_json["devDependencies"])),
        },
        title="Project",
    )

    if args.dry_run:
        for filename, content in project.all_files().items():
            print_file(filename, content)
        return 0

    output_dir = args.output or settings.output_dir
    written = await configurator.write(project, output_dir)
    print_success(f"Generated {len(written)} files in {output_dir}/{project.name}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m configurator.cli``."""
    parser = argparse.ArgumentParser(
        description="Generate webpack/babel/snowpack project scaffolding from features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m configurator.cli react babel css\n"
            "  python -m configurator.cli react typescript --name my-app -o ./projects\n"
            "  python -m configurator.cli --list\n"
        ),
    )
    parser.add_argument("features", nargs="*", help="Feature ids, in fold order")
    parser.add_argument(
        "--name",
        default=None,
        help="Project name (derived from the features if omitted)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: $CONFIGURATOR_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--bundler",
        choices=[Dialect.WEBPACK.value, Dialect.SNOWPACK.value],
        default=Dialect.WEBPACK.value,
        help="Build tool to generate configuration for (default: webpack)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated files instead of writing them",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the available features and exit",
    )

    args = parser.parse_args(argv)
    settings = Settings.from_env()

    try:
        code = asyncio.run(run(args, settings))
    except ConfiguratorError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
