"""Public file storage for uploads (profile pictures, feed media)."""

import asyncio
import logging
import secrets
from pathlib import Path, PurePosixPath
from typing import Protocol

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """A file could not be stored."""


class ObjectStore(Protocol):

    async def put(
        self, path: str, data: bytes, *, public: bool = True, add_random_suffix: bool = False
    ) -> str:
        """Store bytes under `path` and return the URL they are served from."""
        ...


def _safe_key(path: str) -> PurePosixPath:
    """Normalise a storage key; reject absolute paths and parent references."""
    key = PurePosixPath(path.replace("\\", "/"))
    if key.is_absolute() or ".." in key.parts or not key.name:
        raise UploadError(f"Invalid storage path: {path!r}")
    return key


def _with_suffix(key: PurePosixPath) -> PurePosixPath:
    return key.with_name(f"{key.stem}-{secrets.token_hex(8)}{key.suffix}")


class LocalObjectStore:
    """Writes files under a directory that the web app serves at `base_url`.

    Every stored object is publicly readable; `public=False` is refused.
    """

    def __init__(self, root: str, base_url: str = "/uploads"):
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/")

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def put(
        self, path: str, data: bytes, *, public: bool = True, add_random_suffix: bool = False
    ) -> str:
        if not public:
            raise UploadError("Private objects are not supported by local storage")
        key = _safe_key(path)
        if add_random_suffix:
            key = _with_suffix(key)

        target = self.root.joinpath(*key.parts)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write, target, data)
        except OSError as e:
            raise UploadError(f"Could not write {key}: {e}") from e

        logger.info("Stored %d bytes at %s", len(data), key)
        return f"{self.base_url}/{key.as_posix()}"
