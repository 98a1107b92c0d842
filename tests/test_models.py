"""Tests for resolver data models."""

import pytest
from tsdeps.errors import TypingsConfigurationError
from tsdeps.models import PreprocessedFile
from tsdeps.models import SpecifierKind
from tsdeps.models import TypingsDirective
from tsdeps.models import TypingsKind


class TestSpecifierKind:
    def test_merge_order(self):
        assert SpecifierKind.merge_order() == [
            SpecifierKind.FILE_REFERENCE,
            SpecifierKind.TYPE_REFERENCE_DIRECTIVE,
            SpecifierKind.IMPORT,
            SpecifierKind.AMBIENT_EXTERNAL_MODULE,
        ]


class TestPreprocessedFile:
    def test_specifiers_follow_merge_order(self):
        info = PreprocessedFile(
            referenced_files=["ref.d.ts"],
            type_reference_directives=["node"],
            imported_files=["./a", "./b"],
            ambient_external_modules=["ext"],
        )

        assert list(info.specifiers()) == [
            (SpecifierKind.FILE_REFERENCE, "ref.d.ts"),
            (SpecifierKind.TYPE_REFERENCE_DIRECTIVE, "node"),
            (SpecifierKind.IMPORT, "./a"),
            (SpecifierKind.IMPORT, "./b"),
            (SpecifierKind.AMBIENT_EXTERNAL_MODULE, "ext"),
        ]

    def test_empty(self):
        assert list(PreprocessedFile().specifiers()) == []


class TestTypingsDirective:
    def test_true_means_derived(self):
        assert TypingsDirective.parse(True, "/x/pkg.js").kind is TypingsKind.DERIVED

    def test_string_is_explicit(self):
        directive = TypingsDirective.parse("./typings/pkg.d.ts", "/x/pkg.js")
        assert directive.kind is TypingsKind.EXPLICIT
        assert directive.path == "./typings/pkg.d.ts"

    def test_empty_string_is_explicit(self):
        assert TypingsDirective.parse("", "/x/pkg.js") == TypingsDirective(TypingsKind.EXPLICIT, "")

    @pytest.mark.parametrize("value", [None, False, 0, {}, []])
    def test_falsy_is_absent(self, value):
        assert TypingsDirective.parse(value, "/x/pkg.js") == TypingsDirective(TypingsKind.ABSENT)

    @pytest.mark.parametrize("value", [{"main": "index.d.ts"}, ["a.d.ts"], 1])
    def test_other_truthy_values_are_rejected(self, value):
        with pytest.raises(TypingsConfigurationError) as exc_info:
            TypingsDirective.parse(value, "/x/pkg.js")

        assert exc_info.value.value == value
        assert exc_info.value.address == "/x/pkg.js"
        assert "/x/pkg.js" in str(exc_info.value)
        assert str(value) in str(exc_info.value)
