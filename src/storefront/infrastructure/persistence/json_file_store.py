"""JSON-file-backed implementation of KeyValueStore.

Global keys live at ``<root>/<kind>.json``; per-user keys at
``<root>/<kind>/<owner>.json``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from storefront.domain.exceptions import CorruptStateError
from storefront.domain.repository.key_value_store import KeyValueStore, StoreKey

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    # --- KeyValueStore interface ----------------------------------------------

    def load(self, key: StoreKey) -> object | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CorruptStateError(f"Stored value for '{key}' is not valid JSON") from exc
        logger.debug("Loaded %s from %s", key, path)
        return value

    def save(self, key: StoreKey, value: object) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(value, indent=2) + "\n"
        # Write beside the target and rename, so a key is never half-written.
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved %s to %s", key, path)

    def delete(self, key: StoreKey) -> None:
        self._path_for(key).unlink(missing_ok=True)

    # --- Path helpers ---------------------------------------------------------

    def _path_for(self, key: StoreKey) -> Path:
        if key.owner is None:
            return self._root / f"{key.kind}.json"
        return self._root / key.kind / f"{key.owner}.json"
