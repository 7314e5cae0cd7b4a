"""Built-in feature catalogs.

``default_catalog()`` covers webpack (with babel); ``snowpack_catalog()``
covers snowpack.  Both are ordinary ``FeatureCatalog`` instances: callers can
build their own and pass them anywhere these are accepted.

Transforms receive a private copy of the base template from the reducer and
may update it in place before returning it.
"""

from __future__ import annotations

from typing import Any

from configurator.composer.catalog import (
    CatalogBase,
    Dialect,
    Feature,
    FeatureCatalog,
    Selection,
    passthrough,
)
from configurator.composer.reducer import entry_extension
from configurator.composer.values import mark


# ---------------------------------------------------------------------------
# Webpack helpers
# ---------------------------------------------------------------------------


def _add_rule(config: dict[str, Any], rule: dict[str, Any]) -> dict[str, Any]:
    config.setdefault("module", {}).setdefault("rules", []).append(rule)
    return config


def _add_extensions(config: dict[str, Any], extensions: list[str]) -> dict[str, Any]:
    current = config.setdefault("resolve", {}).setdefault("extensions", [])
    current.extend(ext for ext in extensions if ext not in current)
    return config


def _add_plugin(config: dict[str, Any], plugin: str) -> dict[str, Any]:
    config.setdefault("plugins", []).append(mark(plugin))
    return config


def _style_rule(test: str, loaders: list[str]) -> dict[str, Any]:
    return {"test": mark(test), "use": ["style-loader", "css-loader", *loaders]}


# ---------------------------------------------------------------------------
# Webpack / babel transforms
# ---------------------------------------------------------------------------


def _babel_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    test = r"/\.(js|jsx)$/" if "react" in selection else r"/\.js$/"
    return _add_rule(
        config,
        {"test": mark(test), "use": "babel-loader", "exclude": mark("/node_modules/")},
    )


def _babel_babel(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    config.setdefault("presets", []).append("@babel/preset-env")
    return config


def _react_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    return _add_extensions(config, [".js", ".jsx"])


def _react_babel(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    if "babel" in selection:
        config.setdefault("presets", []).append("@babel/preset-react")
    return config


def _typescript_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    _add_rule(
        config,
        {"test": mark(r"/\.ts(x)?$/"), "loader": "ts-loader", "exclude": mark("/node_modules/")},
    )
    return _add_extensions(config, [".tsx", ".ts", ".js"])


def _css_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    return _add_rule(config, _style_rule(r"/\.css$/", []))


def _sass_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    return _add_rule(config, _style_rule(r"/\.scss$/", ["sass-loader"]))


def _less_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    return _add_rule(config, _style_rule(r"/\.less$/", ["less-loader"]))


def _hot_loader_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    config.setdefault("devServer", {})["static"] = {"directory": "./dist"}
    config.setdefault("resolve", {}).setdefault("alias", {})[
        "react-dom"
    ] = "@hot-loader/react-dom"
    return config


def _hot_loader_babel(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    config.setdefault("plugins", []).append("react-hot-loader/babel")
    return config


def _code_split_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    config.setdefault("output", {})["filename"] = "[name].[contenthash].js"
    # hashed bundle names are injected into the page by the plugin
    _add_plugin(config, "new HtmlWebpackPlugin({ template: './src/index.html' })")
    config["optimization"] = {
        "runtimeChunk": "single",
        "splitChunks": {
            "cacheGroups": {
                "vendor": {
                    "test": mark(r"/[\\/]node_modules[\\/]/"),
                    "name": "vendors",
                    "chunks": "all",
                },
            },
        },
    }
    return config


def _moment_webpack(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
    return _add_plugin(
        config,
        r"new webpack.IgnorePlugin({ resourceRegExp: /^\.\/locale$/, contextRegExp: /moment$/ })",
    )


# ---------------------------------------------------------------------------
# Dependency lists that depend on the selection
# ---------------------------------------------------------------------------


def _react_dev_dependencies(selection: Selection) -> list[str]:
    return ["@babel/preset-react"] if "babel" in selection else []


def _typescript_dev_dependencies(selection: Selection) -> list[str]:
    names = ["typescript", "ts-loader"]
    if "react" in selection:
        names.extend(["@types/react", "@types/react-dom"])
    return names


def _snowpack_typescript_dev_dependencies(selection: Selection) -> list[str]:
    names = ["typescript", "@snowpack/plugin-typescript"]
    if "react" in selection:
        names.extend(["@types/react", "@types/react-dom"])
    return names


# ---------------------------------------------------------------------------
# Generated source files
# ---------------------------------------------------------------------------


def _index_html(script_tag: str = "") -> str:
    body = '    <div id="app"></div>\n'
    if script_tag:
        body += f"    {script_tag}\n"
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        "    <title>Empty project</title>\n"
        '    <meta charset="utf-8">\n'
        "  </head>\n"
        "  <body>\n"
        f"{body}"
        "  </body>\n"
        "</html>\n"
    )


def _base_files(selection: Selection) -> dict[str, str]:
    files = {
        f"src/index.{entry_extension(selection)}": 'console.log("Hello World!");\n',
        ".gitignore": "node_modules\ndist/*.js\n",
    }
    # with code splitting the page is generated from src/index.html instead
    if "code-split-vendors" not in selection:
        files["dist/index.html"] = _index_html('<script src="bundle.js"></script>')
    return files


def _code_split_files(selection: Selection) -> dict[str, str]:
    return {"src/index.html": _index_html()}


def _react_files(selection: Selection) -> dict[str, str]:
    extension = entry_extension(selection)
    hot = "react-hot-loader" in selection
    app_import = "import { hot } from 'react-hot-loader/root';\n" if hot else ""
    app_export = "export default hot(App);" if hot else "export default App;"
    return {
        f"src/App.{'tsx' if extension == 'tsx' else 'js'}": (
            "import React from 'react';\n"
            f"{app_import}\n"
            "const App = () => <h1>Hello React</h1>;\n\n"
            f"{app_export}\n"
        ),
        f"src/index.{extension}": (
            "import React from 'react';\n"
            "import ReactDOM from 'react-dom';\n"
            "import App from './App';\n\n"
            "ReactDOM.render(<App />, document.getElementById('app'));\n"
        ),
    }


def _typescript_files(selection: Selection) -> dict[str, str]:
    jsx = '\n    "jsx": "react",' if "react" in selection else ""
    return {
        "tsconfig.json": (
            "{\n"
            '  "compilerOptions": {\n'
            '    "outDir": "./dist/",\n'
            '    "noImplicitAny": true,\n'
            '    "module": "es6",\n'
            f'    "target": "es5",{jsx}\n'
            '    "allowJs": true,\n'
            '    "moduleResolution": "node"\n'
            "  }\n"
            "}\n"
        ),
    }


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


def default_catalog() -> FeatureCatalog:
    """Return the built-in webpack + babel feature catalog."""
    features = {
        "react": Feature(
            group="Main library",
            transforms={Dialect.WEBPACK: _react_webpack, Dialect.BABEL: _react_babel},
            dependencies=["react", "react-dom"],
            dev_dependencies=_react_dev_dependencies,
            files=_react_files,
        ),
        "babel": Feature(
            group="Transpiler",
            transforms={Dialect.WEBPACK: _babel_webpack, Dialect.BABEL: _babel_babel},
            dev_dependencies=["babel-loader", "@babel/core", "@babel/preset-env"],
        ),
        "typescript": Feature(
            group="Transpiler",
            transforms={Dialect.WEBPACK: _typescript_webpack, Dialect.BABEL: passthrough},
            dev_dependencies=_typescript_dev_dependencies,
            files=_typescript_files,
        ),
        "css": Feature(
            group="Styling",
            transforms={Dialect.WEBPACK: _css_webpack, Dialect.BABEL: passthrough},
            dev_dependencies=["style-loader", "css-loader"],
        ),
        "sass": Feature(
            group="Styling",
            transforms={Dialect.WEBPACK: _sass_webpack, Dialect.BABEL: passthrough},
            dev_dependencies=["style-loader", "css-loader", "sass-loader", "sass"],
        ),
        "less": Feature(
            group="Styling",
            transforms={Dialect.WEBPACK: _less_webpack, Dialect.BABEL: passthrough},
            dev_dependencies=["style-loader", "css-loader", "less-loader", "less"],
        ),
        "react-hot-loader": Feature(
            group="Optimization",
            transforms={
                Dialect.WEBPACK: _hot_loader_webpack,
                Dialect.BABEL: _hot_loader_babel,
            },
            dependencies=["react-hot-loader", "@hot-loader/react-dom"],
            dev_dependencies=["webpack-dev-server"],
            package_json={"scripts": {"start": "webpack serve --hot --mode development"}},
        ),
        "code-split-vendors": Feature(
            group="Optimization",
            transforms={Dialect.WEBPACK: _code_split_webpack, Dialect.BABEL: passthrough},
            dev_dependencies=["html-webpack-plugin"],
            webpack_imports=["const HtmlWebpackPlugin = require('html-webpack-plugin');"],
            package_json={"scripts": {"clean": "rm dist/*.js"}},
            files=_code_split_files,
        ),
        "lodash": Feature(
            group="Utilities",
            transforms={Dialect.WEBPACK: passthrough, Dialect.BABEL: passthrough},
            dependencies=["lodash"],
        ),
        "moment": Feature(
            group="Utilities",
            transforms={Dialect.WEBPACK: _moment_webpack, Dialect.BABEL: passthrough},
            dependencies=["moment"],
        ),
    }
    base = CatalogBase(
        dev_dependencies=["webpack", "webpack-cli"],
        package_json={
            "scripts": {
                "clean": "rm dist/bundle.js",
                "build-dev": "webpack --mode development",
                "build-prod": "webpack --mode production",
            },
        },
        files=_base_files,
    )
    return FeatureCatalog(features, base, dialects=(Dialect.WEBPACK, Dialect.BABEL))


# ---------------------------------------------------------------------------
# Snowpack
# ---------------------------------------------------------------------------


def _snowpack_plugin(name: str):
    def transform(config: dict[str, Any], selection: Selection) -> dict[str, Any]:
        config.setdefault("plugins", []).append(name)
        return config

    return transform


def _snowpack_base_files(selection: Selection) -> dict[str, str]:
    files = _base_files(selection)
    # snowpack serves src/ compiled to .js at the site root
    files["dist/index.html"] = _index_html('<script type="module" src="/index.js"></script>')
    return files


def snowpack_catalog() -> FeatureCatalog:
    """Return the built-in snowpack feature catalog."""
    features = {
        "react": Feature(
            group="Main library",
            transforms={Dialect.SNOWPACK: passthrough},
            dependencies=["react", "react-dom"],
            files=_react_files,
        ),
        "typescript": Feature(
            group="Transpiler",
            transforms={Dialect.SNOWPACK: _snowpack_plugin("@snowpack/plugin-typescript")},
            dev_dependencies=_snowpack_typescript_dev_dependencies,
            files=_typescript_files,
        ),
        "sass": Feature(
            group="Styling",
            transforms={Dialect.SNOWPACK: _snowpack_plugin("@snowpack/plugin-sass")},
            dev_dependencies=["@snowpack/plugin-sass"],
        ),
    }
    base = CatalogBase(
        dev_dependencies=["snowpack"],
        package_json={
            "scripts": {"start": "snowpack dev", "build": "snowpack build"},
        },
        files=_snowpack_base_files,
    )
    return FeatureCatalog(features, base, dialects=(Dialect.SNOWPACK,))
