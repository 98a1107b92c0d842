"""Shared fixtures for resolver tests.

The fake address resolver mimics a package-style layout:
- absolute specifiers are returned unchanged
- relative specifiers are joined onto the origin's directory
- bare specifiers land in ``<origin dir>/resolved/<name>``, with single-segment
  names pointing at ``<name>/<name>.js``
- anything still lacking an extension gets ``.ts``
"""

import posixpath
from unittest.mock import AsyncMock

import pytest
from tsdeps.host import FileStore
from tsdeps.resolver import Resolver

SOURCE_NAME = "/proj/src/somefile.ts"


async def fake_resolve(dep: str, parent: str) -> str:
    if dep.startswith("/"):
        result = dep
    elif dep.startswith("."):
        result = posixpath.normpath(posixpath.join(posixpath.dirname(parent), dep))
    else:
        result = posixpath.join(posixpath.dirname(parent), "resolved", dep)
        if "/" not in dep:
            result = posixpath.join(result, dep)
        if not posixpath.splitext(result)[1]:
            result = result + ".js"

    if not posixpath.splitext(result)[1]:
        result = result + ".ts"
    return result


@pytest.fixture
def metadata():
    """Package descriptors keyed by script address; unknown addresses have none."""
    return {}


@pytest.fixture
def resolve_mock():
    return AsyncMock(side_effect=fake_resolve)


@pytest.fixture
def lookup_mock(metadata):
    return AsyncMock(side_effect=lambda address: metadata.get(address, {}))


@pytest.fixture
def make_resolver(resolve_mock, lookup_mock):
    """Build a (host, resolver) pair for the given options."""

    def _make(options=None):
        host = FileStore(options)
        return host, Resolver(host, resolve_mock, lookup_mock)

    return _make
