"""Registry of declaration files that every resolved file depends on."""

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class DeclarationRegistry:
    """Append-only ordered set of declaration-file addresses.

    Grown only through ``register``; there is no removal. Files resolved
    before a registration do not pick it up retroactively.
    """

    def __init__(self) -> None:
        self._addresses: dict[str, None] = {}

    def register(self, address: str) -> None:
        if address in self._addresses:
            logger.debug(f"[declarations] {address} already registered")
            return
        self._addresses[address] = None
        logger.debug(f"[declarations] registered {address} (#{len(self._addresses)})")

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._addresses)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __repr__(self) -> str:
        return f"DeclarationRegistry({list(self._addresses)!r})"
