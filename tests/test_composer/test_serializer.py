"""Tests for the dialect serializer (configurator.composer.serializer)."""

from __future__ import annotations

import json

import pytest

from configurator.composer.catalog import Dialect
from configurator.composer.errors import (
    ConfiguratorError,
    SerializationError,
    UnknownDialectError,
)
from configurator.composer.serializer import (
    STYLE_BY_DIALECT,
    Style,
    quote,
    serialize,
    to_json,
    to_module,
)
from configurator.composer.values import mark

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Data style
# ---------------------------------------------------------------------------


class TestToJson:
    def test_two_space_indent(self):
        assert to_json({"mount": {"src": "/"}}) == '{\n  "mount": {\n    "src": "/"\n  }\n}'

    @pytest.mark.parametrize(
        "obj",
        [
            {},
            {"a": 1, "b": [1, 2.5, None, True], "c": {"d": "e"}},
            {"unicode": "héllo", "quote": "it's \"quoted\""},
            {"plugins": ["@snowpack/plugin-sass"], "mount": {"dist": "/", "src": "/"}},
        ],
    )
    def test_parse_round_trip(self, obj):
        assert json.loads(to_json(obj)) == obj

    def test_non_ascii_is_kept(self):
        assert "héllo" in to_json({"a": "héllo"})

    def test_rejects_raw_code(self):
        with pytest.raises(SerializationError):
            to_json({"path": mark("path.resolve()")})

    def test_raw_code_error_is_a_configurator_error(self):
        with pytest.raises(ConfiguratorError):
            to_json({"plugins": [mark("require('x')")]})


# ---------------------------------------------------------------------------
# Module style
# ---------------------------------------------------------------------------


class TestToModule:
    def test_empty_containers(self):
        assert to_module({}) == "{}"
        assert to_module([]) == "[]"

    def test_scalars(self):
        assert to_module(None) == "null"
        assert to_module(True) == "true"
        assert to_module(False) == "false"
        assert to_module(3) == "3"
        assert to_module(1.5) == "1.5"
        assert to_module(2.0) == "2"

    def test_object_layout(self):
        text = to_module({"entry": "./src/index.js", "output": {"filename": "bundle.js"}})
        assert text == (
            "{\n"
            "  entry: './src/index.js',\n"
            "  output: {\n"
            "    filename: 'bundle.js'\n"
            "  }\n"
            "}"
        )

    def test_array_layout(self):
        assert to_module({"a": ["x", 1]}) == "{\n  a: [\n    'x',\n    1\n  ]\n}"

    def test_non_identifier_keys_are_quoted(self):
        text = to_module({"react-dom": "x", "$ok": 1, "_ok": 2, "9lives": 3})
        assert "'react-dom': 'x'" in text
        assert "$ok: 1" in text
        assert "_ok: 2" in text
        assert "'9lives': 3" in text

    def test_key_with_trailing_newline_is_quoted(self):
        assert to_module({"abc\n": 1}) == "{\n  'abc\\n': 1\n}"
        assert to_module({"abc": 1}) == "{\n  abc: 1\n}"

    def test_string_escaping(self):
        assert quote("it's") == "'it\\'s'"
        assert quote("a\\b") == "'a\\\\b'"
        assert quote("line\nbreak") == "'line\\nbreak'"
        assert quote('say "hi"') == "'say \"hi\"'"

    def test_raw_code_is_unquoted(self):
        text = to_module({"path": mark("path.resolve(__dirname, 'dist')")})
        assert text == "{\n  path: path.resolve(__dirname, 'dist')\n}"

    def test_raw_code_double_quotes_escaped(self):
        text = to_module({"x": mark('require("a")')})
        assert 'require(\\"a\\")' in text

    def test_raw_code_in_array(self):
        text = to_module({"plugins": [mark("new webpack.ProgressPlugin()")]})
        assert "    new webpack.ProgressPlugin()" in text
        assert "'new webpack" not in text

    def test_prefixed_plain_string_stays_quoted(self):
        assert to_module({"a": "CODE:x"}) == "{\n  a: 'CODE:x'\n}"

    def test_tuple_renders_as_array(self):
        assert to_module(("a",)) == "[\n  'a'\n]"

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_module({"a": object()})


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestSerialize:
    def test_styles(self):
        assert STYLE_BY_DIALECT[Dialect.WEBPACK] is Style.MODULE
        assert STYLE_BY_DIALECT[Dialect.BABEL] is Style.MODULE
        assert STYLE_BY_DIALECT[Dialect.SNOWPACK] is Style.DATA

    def test_snowpack_is_json(self):
        assert serialize({"a": "b"}, "snowpack") == '{\n  "a": "b"\n}'

    def test_webpack_is_module(self):
        assert serialize({"a": "b"}, Dialect.WEBPACK) == "{\n  a: 'b'\n}"

    def test_unknown_dialect(self):
        with pytest.raises(UnknownDialectError):
            serialize({}, "rollup")
