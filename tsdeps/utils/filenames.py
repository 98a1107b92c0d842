"""Specifier and address predicates.

Only the prefix and suffix of a name are ever inspected. Whether a name
actually exists anywhere is the business of the injected resolver.
"""

import re

_TYPESCRIPT = re.compile(r"\.tsx?$", re.IGNORECASE)
_DECLARATION = re.compile(r"\.d\.tsx?$", re.IGNORECASE)
_JAVASCRIPT = re.compile(r"\.js$", re.IGNORECASE)


def is_relative(name: str) -> bool:
    return name.startswith(".")


def is_absolute(name: str) -> bool:
    return name.startswith("/")


def is_ambient(name: str) -> bool:
    """True for bare names such as ``lodash`` or ``ambient/ambient.d.ts``."""
    return not is_relative(name) and not is_absolute(name)


def is_typescript(name: str | None) -> bool:
    """True when the name is a checkable source or declaration file."""
    return bool(name) and _TYPESCRIPT.search(name) is not None


def is_declaration(name: str | None) -> bool:
    return bool(name) and _DECLARATION.search(name) is not None


def is_javascript(name: str | None) -> bool:
    return bool(name) and _JAVASCRIPT.search(name) is not None


def js_to_dts(address: str) -> str:
    """Swap a trailing ``.js`` for ``.d.ts`` (``pkg/pkg.js`` -> ``pkg/pkg.d.ts``)."""
    return _JAVASCRIPT.sub(".d.ts", address)


def strip_js_extension(address: str) -> str:
    return _JAVASCRIPT.sub("", address)


def strip_relative_marker(path: str) -> str:
    return path[2:] if path.startswith("./") else path


def package_name(specifier: str) -> str:
    """Derive the owning package of an import specifier.

    Scoped packages keep their first two segments::

        package_name("@angular/core/testing")  # "@angular/core"
        package_name("rxjs/operators")         # "rxjs"
    """
    parts = specifier.split("/")
    if parts[0].startswith("@") and len(parts) > 1:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]
