"""Registry of known servers (id -> install path and game variant), stored as JSON."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Union

from . import config
from .errors import ConfigIOError, UnknownServerError
from .schema import GameVariant

logger = logging.getLogger(__name__)


@dataclass
class ServerEntry:
    server_id: str
    install_path: str
    variant: str = config.DEFAULT_VARIANT
    name: str = ""

    @property
    def game_variant(self) -> GameVariant:
        return GameVariant.coerce(self.variant)

    def config_dir(self) -> str:
        return os.path.join(self.install_path, *config.CONFIG_SUBDIR.split("/"))


class ServerRegistry:
    """Manages the persisted list of servers the editor can open."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or config.SERVER_REGISTRY_PATH
        self._cache: Optional[Dict[str, ServerEntry]] = None

    def _load(self) -> Dict[str, ServerEntry]:
        if self._cache is not None:
            return self._cache

        entries: Dict[str, ServerEntry] = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
                for item in raw.get("servers", []):
                    entry = ServerEntry(**item)
                    entries[entry.server_id] = entry
            except (OSError, ValueError, TypeError) as e:
                # Unreadable registry behaves like an empty one
                logger.warning(f"Could not read server registry {self.path}: {e}")
        self._cache = entries
        return entries

    def _save(self, entries: Dict[str, ServerEntry]) -> None:
        """Write ``entries`` and adopt them as the cache once the write succeeded."""
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"servers": [asdict(e) for e in entries.values()]}, f, indent=2)
        except OSError as e:
            raise ConfigIOError(f"Could not write server registry {self.path}: {e}") from e
        self._cache = entries

    def list(self) -> List[ServerEntry]:
        return list(self._load().values())

    def get(self, server_id: Union[int, str]) -> ServerEntry:
        entry = self._load().get(str(server_id))
        if entry is None:
            raise UnknownServerError(server_id)
        return entry

    def add(self, server_id: Union[int, str], install_path: str, variant: Union[GameVariant, str, None] = None,
            name: str = "") -> ServerEntry:
        v = GameVariant.coerce(variant or config.DEFAULT_VARIANT).value
        entry = ServerEntry(str(server_id), os.path.abspath(install_path), v, name)
        entries = dict(self._load())
        entries[entry.server_id] = entry
        self._save(entries)
        logger.info("Registered server %s (%s) at %s", entry.server_id, v, entry.install_path)
        return entry

    def remove(self, server_id: Union[int, str]) -> None:
        entries = dict(self._load())
        if entries.pop(str(server_id), None) is None:
            raise UnknownServerError(server_id)
        self._save(entries)
