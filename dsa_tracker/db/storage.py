import os
import tempfile
from pathlib import Path
from typing import Dict, Optional


class KeyValueStorage:
    """
    Durable string key-value storage used for the tracker records.

    Swapping to another medium should only require subclassing this class while
    preserving the two methods used by the repo.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError


class FileStorage(KeyValueStorage):
    """
    One UTF-8 file per key inside a directory.

    Values are opaque strings, so files carry the bare key as their name. Writes
    go to a temporary file in the same directory that then replaces the target,
    so a record on disk is always either the previous value or the new one.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / key

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.directory, prefix=f".{key}.", suffix=".tmp", delete=False
        ) as handle:
            tmp_path = Path(handle.name)
            try:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            except OSError:
                handle.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            tmp_path.replace(self._path(key))
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


class InMemoryStorage(KeyValueStorage):
    """Simple in-memory storage for unit tests."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
