from __future__ import annotations

import logging


STORAGE_LOGGERS = ("input_store.storage",)


def configure_logging(level: int = logging.INFO, *, verbose_storage: bool = False) -> None:
    """Set up root logging for the CLI.

    Per-save debug lines from the store stay hidden unless ``verbose_storage``
    is set, even when the root level is DEBUG.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    storage_level = logging.DEBUG if verbose_storage else max(level, logging.INFO)
    for name in STORAGE_LOGGERS:
        logging.getLogger(name).setLevel(storage_level)
