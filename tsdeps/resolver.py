"""Dependency resolution engine.

Turns the raw specifiers of a file into concrete addresses, applying the
language and packaging conventions for each kind of specifier:

- file references: bare names resolve relative to the referencing file
- type reference directives: @types lookup only
- imports and ambient external modules: general resolution, with script
  targets superseded by @types or package typings where available

How a specifier maps onto an address is decided by the injected ``resolve``
function; package metadata comes from the injected ``lookup`` function.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any

from .errors import FileNotAddedError
from .errors import ResolutionError
from .host import FileStore
from .host import ResolutionState
from .host import SourceFile
from .models import DependencyInfo
from .models import PreprocessedFile
from .models import SpecifierKind
from .models import TypingsDirective
from .models import TypingsKind
from .preprocess import Preprocessor
from .preprocess import TreeSitterPreprocessor
from .registry import DeclarationRegistry
from .utils import gather_or_fail
from .utils import is_ambient
from .utils import is_declaration
from .utils import is_javascript
from .utils import is_relative
from .utils import is_typescript
from .utils import js_to_dts
from .utils import package_name
from .utils import strip_js_extension
from .utils import strip_relative_marker

logger = logging.getLogger(__name__)

# (specifier, origin file) -> address
ResolveFunction = Callable[[str, str], Awaitable[str]]
# address -> package descriptor exposing a 'typings' entry
LookupFunction = Callable[[str], Awaitable[Any]]


class Resolver:
    """Resolves the dependencies of files held by a FileStore.

    Each file is resolved at most once; later requests share the first
    computation and its outcome, even if the file's text has since changed
    in place. Declaration files registered here are appended to every
    dependency list computed afterwards.
    """

    def __init__(
        self,
        host: FileStore,
        resolve: ResolveFunction,
        lookup: LookupFunction,
        preprocessor: Preprocessor | None = None,
        declarations: DeclarationRegistry | None = None,
    ):
        self._host = host
        self._resolve = resolve
        self._lookup = lookup
        self._preprocessor = preprocessor or TreeSitterPreprocessor()
        self._declarations = declarations if declarations is not None else DeclarationRegistry()

    @property
    def declaration_files(self) -> tuple[str, ...]:
        return self._declarations.snapshot()

    def resolve(self, source_name: str) -> Awaitable[DependencyInfo]:
        """Return an awaitable for the dependency information of a file.

        Must be called while an event loop is running. The computation is
        scheduled before this method returns.

        Raises:
            FileNotAddedError: The file is not in the store
        """
        file = self._host.get_file(source_name)
        if file is None:
            raise FileNotAddedError(source_name)

        if file.resolution.state is ResolutionState.UNSTARTED:
            logger.debug(f"[resolve] {source_name} -> starting")
            info = self._preprocessor.preprocess(file.text)
            file.resolution.start(self._resolve_file(file, info))
            file.is_lib_file = info.is_lib_file

        return file.resolution.wait()

    def register_declaration_file(self, source_name: str) -> None:
        """Add a declaration file to the dependency list of every file resolved from now on."""
        self._declarations.register(source_name)

    async def _resolve_file(self, file: SourceFile, info: PreprocessedFile) -> DependencyInfo:
        source_name = file.name
        mappings = await self._resolve_dependencies(source_name, info)

        # ignore e.g. js, css files
        deps = list(dict.fromkeys(address for address in mappings.values() if is_typescript(address)))
        refs = [decl for decl in self._declarations if decl != source_name and decl not in deps]

        file.dependencies = DependencyInfo(mappings=mappings, list=deps + refs)

        logger.debug(f"[resolve] {source_name} -> {len(deps)} dependencies, {len(refs)} declarations")
        return file.dependencies

    async def _resolve_dependencies(self, source_name: str, info: PreprocessedFile) -> dict[str, str | None]:
        policies = {
            SpecifierKind.FILE_REFERENCE: self._resolve_reference,
            SpecifierKind.TYPE_REFERENCE_DIRECTIVE: self._resolve_type_reference,
            SpecifierKind.IMPORT: self._resolve_import,
            SpecifierKind.AMBIENT_EXTERNAL_MODULE: self._resolve_import,
        }
        specifiers = list(info.specifiers())
        resolved = await gather_or_fail(policies[kind](text, source_name) for kind, text in specifiers)

        mappings: dict[str, str | None] = {}
        for (_kind, text), address in zip(specifiers, resolved):
            mappings[text] = address
        return mappings

    async def _resolve_reference(self, reference_name: str, source_name: str) -> str:
        if (is_ambient(reference_name) and not self._host.options.resolve_ambient_refs) or "/" not in reference_name:
            reference_name = "./" + reference_name

        return await self._resolve_address(reference_name, source_name)

    async def _resolve_type_reference(self, reference_name: str, source_name: str) -> str | None:
        return await self._lookup_at_types(reference_name, source_name)

    async def _resolve_import(self, import_name: str, source_name: str) -> str:
        specifier = import_name
        if is_relative(import_name) and is_declaration(source_name) and not is_declaration(import_name):
            specifier = import_name + ".d.ts"

        address = await self._resolve_address(specifier, source_name)
        if not is_javascript(address):
            return address

        if at_types_address := await self._lookup_at_types(import_name, source_name):
            return at_types_address

        if typings_address := await self._lookup_typings(import_name, source_name, address):
            return typings_address

        return address

    async def _lookup_typings(self, import_name: str, source_name: str, address: str) -> str | None:
        name = package_name(import_name)
        override = self._host.options.typings.get(name)

        if override:
            value = override if import_name == name else True
            logger.debug(f"[typings] {import_name} -> configured override for {name}")
        else:
            metadata = await self._lookup_metadata(address, import_name, source_name)
            value = _typings_of(metadata)

        return await self._resolve_typings(TypingsDirective.parse(value, address), name, source_name, address)

    async def _resolve_typings(
        self, typings: TypingsDirective, name: str, source_name: str, address: str
    ) -> str | None:
        if typings.kind is TypingsKind.DERIVED:
            return js_to_dts(address)

        if typings.kind is TypingsKind.EXPLICIT:
            assert typings.path is not None
            return await self._resolve_address(f"{name}/{strip_relative_marker(typings.path)}", source_name)

        return None

    async def _lookup_at_types(self, import_name: str, source_name: str) -> str | None:
        if import_name not in self._host.options.types:
            return None

        resolved = await self._resolve_address(f"@types/{import_name}", source_name)

        # some loaders hand back an extension where none belongs
        if is_javascript(resolved):
            resolved = strip_js_extension(resolved)

        if not is_declaration(resolved):
            resolved = resolved + "/index.d.ts"

        logger.debug(f"[typings] {import_name} -> @types {resolved}")
        return resolved

    async def _resolve_address(self, specifier: str, source_name: str) -> str:
        try:
            return await self._resolve(specifier, source_name)
        except Exception as e:
            raise ResolutionError(specifier, source_name, str(e) or type(e).__name__) from e

    async def _lookup_metadata(self, address: str, import_name: str, source_name: str) -> Any:
        try:
            return await self._lookup(address)
        except Exception as e:
            raise ResolutionError(import_name, source_name, f"metadata lookup for [{address}] failed: {e}") from e

    def __repr__(self) -> str:
        return f"Resolver(files={len(self._host)}, declarations={len(self._declarations)})"


def _typings_of(metadata: Any) -> Any:
    """Read the 'typings' entry of a package descriptor (mapping or object)."""
    if metadata is None:
        return None
    if isinstance(metadata, dict):
        return metadata.get("typings")
    return getattr(metadata, "typings", None)
