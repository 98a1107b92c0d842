"""Data models shared by the preprocessor, file store and resolver.

Defines:
- SpecifierKind: the four categories a raw specifier can belong to
- PreprocessedFile: categorized specifiers extracted from one file
- DependencyInfo: the resolved dependencies of one file
- TypingsDirective: interpreted form of a package 'typings' value
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any

from .errors import TypingsConfigurationError


class SpecifierKind(str, Enum):
    """Category of a raw specifier.

    Declaration order is the merge order: when the same text shows up in
    several categories, the category merged last wins in ``mappings``.
    """

    FILE_REFERENCE = "file_reference"
    TYPE_REFERENCE_DIRECTIVE = "type_reference_directive"
    IMPORT = "import"
    AMBIENT_EXTERNAL_MODULE = "ambient_external_module"

    @classmethod
    def merge_order(cls) -> list[SpecifierKind]:
        return list(cls)


@dataclass
class PreprocessedFile:
    """Raw specifiers of one file, in source order within each category."""

    referenced_files: list[str] = field(default_factory=list)
    type_reference_directives: list[str] = field(default_factory=list)
    imported_files: list[str] = field(default_factory=list)
    ambient_external_modules: list[str] = field(default_factory=list)
    is_lib_file: bool = False

    def of_kind(self, kind: SpecifierKind) -> list[str]:
        return {
            SpecifierKind.FILE_REFERENCE: self.referenced_files,
            SpecifierKind.TYPE_REFERENCE_DIRECTIVE: self.type_reference_directives,
            SpecifierKind.IMPORT: self.imported_files,
            SpecifierKind.AMBIENT_EXTERNAL_MODULE: self.ambient_external_modules,
        }[kind]

    def specifiers(self) -> Iterator[tuple[SpecifierKind, str]]:
        """Yield (kind, text) pairs in merge order."""
        for kind in SpecifierKind.merge_order():
            for text in self.of_kind(kind):
                yield kind, text


@dataclass
class DependencyInfo:
    """Resolved dependencies of a single file.

    Attributes:
        mappings: Raw specifier text -> resolved address (None when a
            category intentionally has no target)
        list: Checkable addresses, deduplicated, followed by registered
            declaration files
    """

    mappings: dict[str, str | None] = field(default_factory=dict)
    list: list[str] = field(default_factory=list)


class TypingsKind(str, Enum):
    """How a package declares its typings.

    Types:
    - ABSENT: no typings, keep the script address
    - DERIVED: declaration sits next to the script (``typings: true``)
    - EXPLICIT: package-relative path to the declaration
    """

    ABSENT = "absent"
    DERIVED = "derived"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class TypingsDirective:
    kind: TypingsKind
    path: str | None = None

    @classmethod
    def parse(cls, value: Any, address: str) -> TypingsDirective:
        """Interpret a raw 'typings' value from configuration or package metadata.

        Args:
            value: ``True``, a path string, or anything falsy
            address: Script address the value applies to (for error messages)

        Returns:
            TypingsDirective instance

        Raises:
            TypingsConfigurationError: Truthy value that is neither ``True`` nor a string
        """
        if value is True:
            return cls(TypingsKind.DERIVED)
        if isinstance(value, str):
            return cls(TypingsKind.EXPLICIT, value)
        if not value:
            return cls(TypingsKind.ABSENT)
        raise TypingsConfigurationError(value, address)
