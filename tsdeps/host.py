"""In-memory file store consulted by the resolver.

Each added file gets a SourceFile record carrying its text, the lib flag,
and a PendingResolution memo cell. Re-adding a name replaces the record, which
is the only way to make the resolver compute that file's dependencies again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any

from .config import ResolverOptions
from .models import DependencyInfo

logger = logging.getLogger(__name__)

DEFAULT_LIB_FILE_NAME = "lib.d.ts"


class ResolutionState(str, Enum):
    UNSTARTED = "unstarted"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"


class PendingResolution:
    """Single-assignment memo cell for one file's dependency computation.

    ``start`` schedules the computation before returning, so a second caller
    arriving before the first completes sees IN_PROGRESS and shares the task.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[DependencyInfo] | None = None

    @property
    def state(self) -> ResolutionState:
        if self._task is None:
            return ResolutionState.UNSTARTED
        if not self._task.done():
            return ResolutionState.IN_PROGRESS
        if self._task.cancelled() or self._task.exception() is not None:
            return ResolutionState.FAILED
        return ResolutionState.DONE

    def start(self, computation: Coroutine[Any, Any, DependencyInfo]) -> None:
        """Schedule the computation. Requires a running event loop.

        Raises:
            RuntimeError: The cell has already been started, or no event loop is running
        """
        if self._task is not None:
            computation.close()
            raise RuntimeError("resolution already started")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            computation.close()
            raise
        self._task = loop.create_task(computation)

    def wait(self) -> asyncio.Future[DependencyInfo]:
        """Awaitable for the shared computation.

        The task is shielded: cancelling the returned future abandons the
        wait, never the computation itself.
        """
        if self._task is None:
            raise RuntimeError("resolution has not been started")
        return asyncio.shield(self._task)

    def result(self) -> DependencyInfo | None:
        if self.state is ResolutionState.DONE:
            assert self._task is not None
            return self._task.result()
        return None

    def error(self) -> BaseException | None:
        if self.state is ResolutionState.FAILED:
            assert self._task is not None
            if self._task.cancelled():
                return asyncio.CancelledError()
            return self._task.exception()
        return None

    def __repr__(self) -> str:
        return f"PendingResolution({self.state.value})"


@dataclass
class SourceFile:
    """A file known to the store.

    Attributes:
        name: Address of the file
        text: Source text
        is_lib_file: Set by the resolver when the file is the standard library entry
        dependencies: Set by the resolver once resolution completes
        resolution: Memo cell for the dependency computation
    """

    name: str
    text: str
    is_lib_file: bool = False
    dependencies: DependencyInfo | None = None
    resolution: PendingResolution = field(default_factory=PendingResolution)


class FileStore:
    """Holds source files and the options the resolver reads."""

    def __init__(
        self,
        options: ResolverOptions | dict[str, Any] | None = None,
        default_lib_file_name: str = DEFAULT_LIB_FILE_NAME,
    ):
        if options is None:
            options = ResolverOptions()
        elif isinstance(options, dict):
            options = ResolverOptions.model_validate(options)
        self.options = options
        self.default_lib_file_name = default_lib_file_name
        self._files: dict[str, SourceFile] = {}

    def add_file(self, name: str, text: str) -> SourceFile:
        if name in self._files:
            logger.debug(f"[host] replacing {name}")
        source = SourceFile(name=name, text=text)
        self._files[name] = source
        return source

    def get_file(self, name: str) -> SourceFile | None:
        return self._files.get(name)

    def file_exists(self, name: str) -> bool:
        return name in self._files

    def file_names(self) -> list[str]:
        return list(self._files)

    def __len__(self) -> int:
        return len(self._files)
