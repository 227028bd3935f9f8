from __future__ import annotations

import errno
from pathlib import Path
from typing import Iterator


_DISK_FULL_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


class StorageError(Exception):
    """Base class for persistence failures surfaced to callers."""


class StorageWriteError(StorageError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


def _iter_chain(exc: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def is_disk_full(exc: BaseException) -> bool:
    for item in _iter_chain(exc):
        if isinstance(item, OSError) and item.errno in _DISK_FULL_ERRNOS:
            return True
    return False
