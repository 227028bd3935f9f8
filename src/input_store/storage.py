from __future__ import annotations

import json
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Any, List

from .records import Record, sanitize_inputs
from .utils.errors import StorageWriteError, is_disk_full


DEFAULT_DB_PATH = Path("data") / "db.json"
DEFAULT_SEED_RELATIVE_PATH = Path("data") / "overview.json"

logger = logging.getLogger(__name__)


class JSONStorage:
    """File-backed store for input records.

    Reads prefer the primary file and fall back to a seed file; writes always
    replace the primary file whole via a temp file and ``os.replace``.
    """

    def __init__(
        self,
        file_path: str | Path = DEFAULT_DB_PATH,
        *,
        default_data_path: str | Path | None = None,
    ) -> None:
        self.file_path = Path(file_path).expanduser().resolve()
        self.dir = self.file_path.parent
        self.project_root = self.dir.parent
        self.default_data_path = (
            Path(default_data_path).expanduser().resolve()
            if default_data_path
            else self.project_root / DEFAULT_SEED_RELATIVE_PATH
        )

    def ensure_dir(self) -> None:
        try:
            self.dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            # Surfaces later as a write failure.
            logger.debug("Could not create %s: %s", self.dir, exc)

    @staticmethod
    def path_exists(path: str | Path) -> bool:
        try:
            return Path(path).exists()
        except (OSError, ValueError):
            return False

    @staticmethod
    def read_json(path: str | Path) -> List[Any]:
        """Return the raw record list stored at ``path``.

        Accepts a bare list or an object with an ``inputs`` list; any other
        shape yields an empty list. Parse and I/O errors propagate.
        """
        raw = Path(path).read_text(encoding="utf-8")
        parsed = json.loads(raw)
        if isinstance(parsed, list):
            return parsed
        if isinstance(parsed, dict) and isinstance(parsed.get("inputs"), list):
            return parsed["inputs"]
        return []

    def load(self) -> List[Record]:
        for path in (self.file_path, self.default_data_path):
            if not self.path_exists(path):
                continue
            try:
                return sanitize_inputs(self.read_json(path))
            except Exception as exc:
                logger.warning("Failed to read records from %s: %s", path, exc)
        return []

    def save(self, records: Any) -> None:
        self.ensure_dir()

        payload = {"inputs": sanitize_inputs(records)}
        try:
            contents = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
        except (TypeError, ValueError) as exc:
            raise StorageWriteError(
                self.file_path, "Records are not JSON serializable"
            ) from exc

        tmp_path: Path | None = None
        try:
            candidate = self.dir / f"{self.file_path.name}.{uuid.uuid4().hex}.tmp"
            # 0o666 lets the process umask decide permissions for new files.
            fd = os.open(candidate, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
            tmp_path = candidate
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(contents)
                handle.flush()
                os.fsync(handle.fileno())
            _copy_mode(self.file_path, tmp_path)
            os.replace(tmp_path, self.file_path)
        except OSError as exc:
            if tmp_path is not None:
                _discard(tmp_path)
            if is_disk_full(exc):
                logger.error("Disk full while saving %s", self.file_path)
            else:
                logger.error("Failed to save %s: %s", self.file_path, exc)
            raise StorageWriteError(self.file_path, "Failed to save records") from exc

        logger.debug("Saved %d records to %s", len(payload["inputs"]), self.file_path)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.debug("Could not remove temp file %s: %s", path, exc)


def _copy_mode(source: Path, target: Path) -> None:
    try:
        shutil.copymode(source, target)
    except FileNotFoundError:
        pass
