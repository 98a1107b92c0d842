"""Dependency resolution for TypeScript source files.

Given a file's raw reference and import specifiers, produces the concrete
addresses a type checker must load before checking that file:

- Resolver: the resolution engine (memoized per file)
- FileStore: in-memory store of source files and options
- ResolverOptions: ambient-reference toggle, @types allow-list, typings overrides
- TreeSitterPreprocessor: default extractor of raw specifiers
- resolve_all: walk a dependency graph to its fixpoint
"""

from .config import ResolverOptions
from .config import SettingsPaths
from .config import load_options
from .errors import FileNotAddedError
from .errors import ResolutionError
from .errors import ResolverError
from .errors import TypingsConfigurationError
from .host import FileStore
from .host import PendingResolution
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
from .resolver import LookupFunction
from .resolver import ResolveFunction
from .resolver import Resolver
from .walker import resolve_all

__all__ = [
    # Engine
    "Resolver",
    "ResolveFunction",
    "LookupFunction",
    "resolve_all",
    # Store
    "FileStore",
    "SourceFile",
    "PendingResolution",
    "ResolutionState",
    "DeclarationRegistry",
    # Config
    "ResolverOptions",
    "SettingsPaths",
    "load_options",
    # Models
    "DependencyInfo",
    "PreprocessedFile",
    "SpecifierKind",
    "TypingsDirective",
    "TypingsKind",
    "Preprocessor",
    "TreeSitterPreprocessor",
    # Errors
    "ResolverError",
    "FileNotAddedError",
    "ResolutionError",
    "TypingsConfigurationError",
]
