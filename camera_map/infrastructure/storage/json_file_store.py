"""Named-record JSON storage

Each key maps to one JSON document on disk under the storage directory.
Records are always read whole and replaced whole; there is no partial access.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from ...domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class CorruptRecordError(StorageError):
    """Raised when a stored record cannot be parsed as JSON"""
    pass


class JsonFileStore:
    """
    Durable key/value store of JSON documents.

    Writes go to a temporary file in the same directory which then replaces
    the record atomically, so a reader never sees a half-written record.
    """

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def _record_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    def read(self, key: str, default: Any = None) -> Any:
        """
        Load the record stored under key.

        Returns:
            The decoded JSON value, or default when the record does not exist

        Raises:
            CorruptRecordError: If the record exists but is not valid JSON
            StorageError: If the record cannot be read
        """
        path = self._record_path(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default
        except OSError as e:
            raise StorageError(f"Error reading record '{key}': {e}") from e

        if not text.strip():
            return default
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptRecordError(f"Record '{key}' is not valid JSON: {e}") from e

    def write(self, key: str, value: Any) -> None:
        """
        Replace the record stored under key with value.

        Raises:
            StorageError: If value cannot be serialized or the record cannot be written
        """
        path = self._record_path(key)
        try:
            payload = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Error serializing record '{key}': {e}") from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Error writing record '{key}': {e}") from e

        logger.debug(f"Wrote record '{key}' to {path}")

