"""Shared helpers for specifier handling and async coordination."""

from .aio import gather_or_fail
from .filenames import is_absolute
from .filenames import is_ambient
from .filenames import is_declaration
from .filenames import is_javascript
from .filenames import is_relative
from .filenames import is_typescript
from .filenames import js_to_dts
from .filenames import package_name
from .filenames import strip_js_extension
from .filenames import strip_relative_marker

__all__ = [
    "gather_or_fail",
    "is_absolute",
    "is_ambient",
    "is_declaration",
    "is_javascript",
    "is_relative",
    "is_typescript",
    "js_to_dts",
    "package_name",
    "strip_js_extension",
    "strip_relative_marker",
]
