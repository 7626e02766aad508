"""Local JSON cache of the last wishlist payload fetched from the API."""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class WishlistCache:
    """
    File-backed cache for offline display.

    The server stays authoritative: cached data is only a rendering aid and is
    replaced wholesale on every save. A missing or unreadable file is treated as
    an empty cache, never as an error.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        """Return the cached payload, or None if there is no usable cache."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("Could not read wishlist cache at %s", self.path)
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt wishlist cache at %s", self.path)
            return None

        if not isinstance(data, dict):
            return None
        return data

    def save(self, payload: dict[str, Any]) -> None:
        """Atomically replace the cache with payload."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".wishlist-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        """Remove the cache file if present."""
        self.path.unlink(missing_ok=True)
