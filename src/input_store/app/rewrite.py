from __future__ import annotations

import logging

from ..storage import JSONStorage
from ..utils.errors import StorageWriteError
from .doctor import inspect_source


logger = logging.getLogger(__name__)


def run_rewrite(storage: JSONStorage) -> int:
    """Load whatever is available and write it back in canonical form.

    A primary file that exists but cannot be parsed is left alone so it can
    be repaired by hand.
    """
    primary = inspect_source(storage, storage.file_path)
    if primary.exists and not primary.readable:
        print(f"Refusing to overwrite unreadable {storage.file_path}: {primary.error}")
        return 1

    records = storage.load()
    try:
        storage.save(records)
    except StorageWriteError as exc:
        print(f"Failed to write records: {exc}")
        return 1

    logger.info("Rewrote %s", storage.file_path)
    print(f"Wrote {len(records)} records to {storage.file_path}")
    return 0
