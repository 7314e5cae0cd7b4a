"""Tests for the built-in feature catalogs (configurator.features)."""

from __future__ import annotations

import json

import pytest

from configurator.composer import (
    Dialect,
    collect_dependencies,
    create_additional_files_map,
    create_babel_config,
    create_webpack_config,
    reduce_config,
)
from configurator.composer.values import RawCode

pytestmark = pytest.mark.unit


class TestDefaultCatalog:
    def test_feature_ids(self, webpack_catalog):
        assert webpack_catalog.ids() == [
            "react",
            "babel",
            "typescript",
            "css",
            "sass",
            "less",
            "react-hot-loader",
            "code-split-vendors",
            "lodash",
            "moment",
        ]

    def test_covers_webpack_and_babel(self, webpack_catalog):
        assert webpack_catalog.dialects == (Dialect.WEBPACK, Dialect.BABEL)

    def test_babel_rule_matches_jsx_with_react(self, webpack_catalog):
        config = reduce_config(["babel", "react"], Dialect.WEBPACK, webpack_catalog)
        rule = config["module"]["rules"][0]
        assert rule["use"] == "babel-loader"
        assert rule["test"] == RawCode(r"/\.(js|jsx)$/")
        assert config["resolve"]["extensions"] == [".js", ".jsx"]

    def test_typescript_rule_and_extensions(self, webpack_catalog):
        config = reduce_config(["react", "typescript"], Dialect.WEBPACK, webpack_catalog)
        assert config["module"]["rules"][0]["loader"] == "ts-loader"
        assert config["resolve"]["extensions"] == [".js", ".jsx", ".tsx", ".ts"]

    def test_style_rules_stack(self, webpack_catalog):
        config = reduce_config(["css", "sass"], Dialect.WEBPACK, webpack_catalog)
        uses = [rule["use"] for rule in config["module"]["rules"]]
        assert uses == [
            ["style-loader", "css-loader"],
            ["style-loader", "css-loader", "sass-loader"],
        ]

    def test_code_split_output_and_optimization(self, webpack_catalog):
        config = reduce_config(["code-split-vendors"], Dialect.WEBPACK, webpack_catalog)
        assert config["output"]["filename"] == "[name].[contenthash].js"
        vendor = config["optimization"]["splitChunks"]["cacheGroups"]["vendor"]
        assert vendor["name"] == "vendors"

    def test_code_split_generates_html_page(self, webpack_catalog):
        text = create_webpack_config(["code-split-vendors"], webpack_catalog)
        assert "const HtmlWebpackPlugin = require('html-webpack-plugin');" in text
        assert "    new HtmlWebpackPlugin({ template: './src/index.html' })" in text

        files = create_additional_files_map(["code-split-vendors"], webpack_catalog)
        assert "dist/index.html" not in files
        assert "<script" not in files["src/index.html"]
        assert '<div id="app"></div>' in files["src/index.html"]

        names = collect_dependencies(["code-split-vendors"], webpack_catalog)
        assert "html-webpack-plugin" in names.dev_dependencies

    def test_static_page_loads_bundle(self, webpack_catalog):
        files = create_additional_files_map(["lodash"], webpack_catalog)
        assert '<script src="bundle.js"></script>' in files["dist/index.html"]
        assert "src/index.html" not in files

    def test_base_webpack_scripts(self, webpack_catalog):
        scripts = webpack_catalog.base.package_json["scripts"]
        assert scripts["build-dev"] == "webpack --mode development"
        assert scripts["clean"] == "rm dist/bundle.js"

    def test_hot_loader_alias(self, webpack_catalog):
        text = create_webpack_config(["react", "react-hot-loader"], webpack_catalog)
        assert "'react-dom': '@hot-loader/react-dom'" in text

    def test_moment_plugin_is_code(self, webpack_catalog):
        text = create_webpack_config(["moment"], webpack_catalog)
        assert "    new webpack.IgnorePlugin({ resourceRegExp: /^\\.\\/locale$/, contextRegExp: /moment$/ })" in text

    def test_hot_loader_babel_plugin(self, webpack_catalog):
        text = create_babel_config(["babel", "react", "react-hot-loader"], webpack_catalog)
        assert "'react-hot-loader/babel'" in text

    def test_typescript_types_only_with_react(self, webpack_catalog):
        with_react = collect_dependencies(["react", "typescript"], webpack_catalog)
        without = collect_dependencies(["typescript"], webpack_catalog)
        assert "@types/react" in with_react.dev_dependencies
        assert "@types/react" not in without.dev_dependencies

    def test_base_dev_dependencies(self, webpack_catalog):
        names = collect_dependencies([], webpack_catalog)
        assert names.dev_dependencies == ["webpack", "webpack-cli"]
        assert names.dependencies == []

    def test_files_follow_entry_extension(self, webpack_catalog):
        files = create_additional_files_map(["react", "typescript"], webpack_catalog)
        assert "src/index.tsx" in files
        assert "src/App.tsx" in files
        assert "src/index.js" not in files
        assert '"jsx": "react"' in files["tsconfig.json"]

    def test_react_index_overrides_base(self, webpack_catalog):
        files = create_additional_files_map(["react"], webpack_catalog)
        assert "ReactDOM.render" in files["src/index.js"]
        assert "dist/index.html" in files

    def test_hot_app_export(self, webpack_catalog):
        files = create_additional_files_map(["react", "react-hot-loader"], webpack_catalog)
        assert "export default hot(App);" in files["src/App.js"]


class TestSnowpackCatalog:
    def test_covers_snowpack_only(self, snowpack_features):
        assert snowpack_features.dialects == (Dialect.SNOWPACK,)

    def test_base_package_scripts(self, snowpack_features):
        assert snowpack_features.base.package_json["scripts"] == {
            "start": "snowpack dev",
            "build": "snowpack build",
        }

    def test_typescript_dev_dependencies(self, snowpack_features):
        names = collect_dependencies(["typescript"], snowpack_features)
        assert names.dev_dependencies == ["snowpack", "typescript", "@snowpack/plugin-typescript"]

    def test_index_html_loads_module(self, snowpack_features):
        files = create_additional_files_map([], snowpack_features)
        assert '<script type="module" src="/index.js"></script>' in files["dist/index.html"]

    def test_config_is_json(self, snowpack_features):
        config = reduce_config(["sass"], "snowpack", snowpack_features)
        assert json.loads(json.dumps(config)) == {
            "mount": {"dist": "/", "src": "/"},
            "plugins": ["@snowpack/plugin-sass"],
        }
