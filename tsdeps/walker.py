"""Drive a Resolver across the whole reachable dependency graph."""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterable

from .host import FileStore
from .resolver import Resolver

logger = logging.getLogger(__name__)

# address -> source text
FetchFunction = Callable[[str], Awaitable[str]]


async def resolve_all(
    resolver: Resolver,
    host: FileStore,
    file_names: Iterable[str],
    fetch: FetchFunction,
) -> list[str]:
    """Resolve files and everything they depend on, until nothing new turns up.

    Unknown files are fetched and added to the host before being resolved.
    Cycles terminate because a file is fetched only while the host does not
    know it, and resolution itself is memoized per file.

    Args:
        resolver: Resolver bound to ``host``
        host: File store to populate
        file_names: Entry points
        fetch: Async source-text loader for addresses not yet in the host

    Returns:
        Every file name resolved, in discovery order
    """
    pending = list(dict.fromkeys(file_names))
    visited: dict[str, None] = {}

    while pending:
        missing = [name for name in pending if not host.file_exists(name)]
        texts = await asyncio.gather(*(fetch(name) for name in missing))
        for name, text in zip(missing, texts):
            host.add_file(name, text)

        infos = await asyncio.gather(*(resolver.resolve(name) for name in pending))
        visited.update(dict.fromkeys(pending))

        unfetched: dict[str, None] = {}
        for info in infos:
            for dep in info.list:
                if not host.file_exists(dep):
                    unfetched[dep] = None

        logger.debug(f"[walk] resolved {len(pending)} files, {len(unfetched)} new")
        pending = list(unfetched)

    return list(visited)
