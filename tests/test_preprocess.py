"""Tests for the syntax tree based dependency extractor."""

import pytest
from tsdeps.preprocess import TreeSitterPreprocessor


@pytest.fixture
def preprocessor():
    return TreeSitterPreprocessor()


class TestDirectives:
    def test_reference_path(self, preprocessor):
        info = preprocessor.preprocess('/// <reference path="ambient/ambient.d.ts" />\n')
        assert info.referenced_files == ["ambient/ambient.d.ts"]
        assert info.imported_files == []

    def test_reference_types(self, preprocessor):
        info = preprocessor.preprocess("/// <reference types='node'/>\nexport = 1;\n")
        assert info.type_reference_directives == ["node"]
        assert info.referenced_files == []

    def test_no_default_lib_flags_lib_file(self, preprocessor):
        info = preprocessor.preprocess('/// <reference no-default-lib="true"/>\ninterface Array<T> {}\n')
        assert info.is_lib_file is True

    def test_plain_file_is_not_lib(self, preprocessor):
        assert preprocessor.preprocess("export = 42;").is_lib_file is False

    def test_directives_after_comments_and_blank_lines(self, preprocessor):
        source = (
            "/*\n"
            " * header\n"
            " */\n"
            "\n"
            "// a comment\n"
            '/// <reference path="a.d.ts" />\n'
            '/// <reference path="b.d.ts" />\n'
        )
        assert preprocessor.preprocess(source).referenced_files == ["a.d.ts", "b.d.ts"]

    def test_directives_after_first_statement_are_ignored(self, preprocessor):
        source = 'const x = 1;\n/// <reference path="late.d.ts" />\n'
        assert preprocessor.preprocess(source).referenced_files == []


class TestImports:
    def test_import_forms_in_source_order(self, preprocessor):
        source = "\n".join(
            [
                'import {bootstrap} from "angular2";',
                "import * as missing from 'missing';",
                'import "ambient";',
                'import Default, { a as b } from "./default";',
                'import type { T } from "./types";',
                'export * from "./reexport";',
                'export { x } from "./named";',
                'import fs = require("fs");',
                'const lazy = import("./lazy");',
            ]
        )

        assert preprocessor.preprocess(source).imported_files == [
            "angular2",
            "missing",
            "ambient",
            "./default",
            "./types",
            "./reexport",
            "./named",
            "fs",
            "./lazy",
        ]

    def test_multiline_import(self, preprocessor):
        source = 'import {\n  a,\n  b,\n} from "./multi";\n'
        assert preprocessor.preprocess(source).imported_files == ["./multi"]

    def test_imports_in_comments_are_ignored(self, preprocessor):
        source = '// import "./commented";\n/* require("./blocked") */\nimport "./real";\n'
        assert preprocessor.preprocess(source).imported_files == ["./real"]

    def test_specifier_with_slashes_in_string(self, preprocessor):
        source = 'import "http://example.com/lib";\n'
        assert preprocessor.preprocess(source).imported_files == ["http://example.com/lib"]

    def test_member_calls_are_not_imports(self, preprocessor):
        source = 'loader.require("./not-a-dep");\nsystem.import("./nor-this");\n'
        assert preprocessor.preprocess(source).imported_files == []

    def test_import_text_inside_strings_is_ignored(self, preprocessor):
        source = (
            "const help = \"usage: import 'lodash'\";\n"
            "const hint = 'call require(\"./x\") or import(\"./y\")';\n"
            "const tpl = `export * from \"./z\"`;\n"
            'import "./real";\n'
        )
        assert preprocessor.preprocess(source).imported_files == ["./real"]

    def test_declare_module_inside_string_is_ignored(self, preprocessor):
        source = "const doc = 'declare module \"fake\" {}';\n"
        assert preprocessor.preprocess(source).ambient_external_modules == []

    def test_plain_require_calls_are_not_imports(self, preprocessor):
        source = 'const fs = require("fs");\nimport path = require("path");\n'
        assert preprocessor.preprocess(source).imported_files == ["path"]

    def test_dynamic_import_with_computed_specifier_is_ignored(self, preprocessor):
        assert preprocessor.preprocess("const m = import(name);").imported_files == []

    def test_default_export_of_a_string_is_not_an_import(self, preprocessor):
        assert preprocessor.preprocess('export default "./not-a-dep";').imported_files == []

    def test_css_imports_are_reported(self, preprocessor):
        assert preprocessor.preprocess('import "./styles.css";').imported_files == ["./styles.css"]


class TestAmbientModules:
    def test_declare_module(self, preprocessor):
        source = 'declare module "ambient-a" {\n  export var a: number;\n}\ndeclare module \'ambient-b\' {}\n'
        info = preprocessor.preprocess(source)
        assert info.ambient_external_modules == ["ambient-a", "ambient-b"]
        assert info.imported_files == []

    def test_imports_inside_declared_module(self, preprocessor):
        source = 'declare module "outer" {\n  import {x} from "inner";\n}\n'
        info = preprocessor.preprocess(source)
        assert info.ambient_external_modules == ["outer"]
        assert info.imported_files == ["inner"]
