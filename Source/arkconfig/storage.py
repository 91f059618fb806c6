"""
Storage collaborators for config text.

The editing core only talks to the three calls of ``ConfigStorage``. The local
implementation maps (server, logical file) to
``<install>/ShooterGame/Saved/Config/WindowsServer/<file>.ini`` and writes
through a temp-file-then-rename so a crash never leaves a half-written ini
behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from . import config
from .errors import ConfigIOError, ConfigNotFoundError
from .schema import normalize_file_name
from .servers import ServerRegistry

logger = logging.getLogger(__name__)

ServerId = Union[int, str]


class ConfigStorage(ABC):
    """Narrow interface the editor needs from its host environment."""

    @abstractmethod
    def read_config(self, server_id: ServerId, file_name: str) -> str:
        """Return the raw text; raises ConfigNotFoundError or ConfigIOError."""

    @abstractmethod
    def save_config(self, server_id: ServerId, file_name: str, text: str) -> None:
        """Persist the raw text; raises ConfigIOError."""

    @abstractmethod
    def get_config_modified_time(self, server_id: ServerId, file_name: str) -> int:
        """Seconds since the epoch, or 0 when unknown. Must not raise."""


class LocalConfigStorage(ConfigStorage):
    """
    Flat-file storage rooted at each registered server's install path.

    Features:
    - Atomic writes (temp file in the same directory, then rename)
    - Optional copy of the previous file into ``backups/`` before each save
    - Backup retention limit per file
    """

    def __init__(self, servers: ServerRegistry, backup_on_save: Optional[bool] = None,
                 backup_keep: Optional[int] = None):
        self.servers = servers
        self.backup_on_save = config.BACKUP_ON_SAVE if backup_on_save is None else backup_on_save
        self.backup_keep = config.BACKUP_KEEP if backup_keep is None else backup_keep

    def config_path(self, server_id: ServerId, file_name: str) -> str:
        entry = self.servers.get(server_id)
        return os.path.join(entry.config_dir(), f"{normalize_file_name(file_name)}.ini")

    def read_config(self, server_id: ServerId, file_name: str) -> str:
        path = self.config_path(server_id, file_name)
        if not os.path.exists(path):
            # A server that never started has no ini yet; edit from empty
            logger.info("Config %s does not exist yet, starting empty", path)
            return ""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise ConfigIOError(f"Failed to read {path}: {e}") from e

    def save_config(self, server_id: ServerId, file_name: str, text: str) -> None:
        try:
            path = self.config_path(server_id, file_name)
        except ConfigNotFoundError as e:
            raise ConfigIOError(str(e)) from e

        if self.backup_on_save and os.path.exists(path):
            self.create_backup(path)

        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            temp_path = self._create_temp_path(path)
        except OSError as e:
            raise ConfigIOError(f"Failed to prepare write of {path}: {e}") from e

        try:
            with open(temp_path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            # os.replace is atomic on POSIX and overwrites on Windows too
            os.replace(temp_path, path)
        except OSError as e:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass
            raise ConfigIOError(f"Atomic write of {path} failed: {e}") from e
        logger.info(f"Saved config: {path}")

    def get_config_modified_time(self, server_id: ServerId, file_name: str) -> int:
        try:
            path = self.config_path(server_id, file_name)
            if not os.path.exists(path):
                return 0
            return int(os.path.getmtime(path))
        except Exception as e:
            logger.debug(f"Modification time unavailable for {server_id}/{file_name}: {e}")
            return 0

    # --- Backups ---
    def _create_temp_path(self, target_path: str) -> str:
        target = Path(target_path)
        fd, temp_path = tempfile.mkstemp(suffix=".tmp", prefix=f"{target.stem}_", dir=target.parent)
        os.close(fd)
        return temp_path

    def backup_dir(self, path: str) -> str:
        return os.path.join(os.path.dirname(path), "backups")

    def create_backup(self, path: str) -> Optional[str]:
        """Copy ``path`` into its backups/ folder; failures are logged, not raised."""
        backup_dir = self.backup_dir(path)
        name = Path(path)
        stamp = time.strftime("%Y%m%d_%H%M%S")
        backup_path = os.path.join(backup_dir, f"{name.stem}_{stamp}{name.suffix}")
        counter = 1
        while os.path.exists(backup_path):
            backup_path = os.path.join(backup_dir, f"{name.stem}_{stamp}_{counter}{name.suffix}")
            counter += 1
        try:
            os.makedirs(backup_dir, exist_ok=True)
            shutil.copy2(path, backup_path)
        except OSError as e:
            logger.warning(f"Backup of {path} failed: {e}")
            return None
        logger.debug(f"Created backup: {path} -> {backup_path}")
        self.cleanup_backups(path)
        return backup_path

    def list_backups(self, path: str) -> List[str]:
        backup_dir = self.backup_dir(path)
        if not os.path.isdir(backup_dir):
            return []
        stem = Path(path).stem + "_"
        found = [
            os.path.join(backup_dir, n) for n in os.listdir(backup_dir)
            if n.startswith(stem) and n.endswith(".ini")
        ]
        # Newest first
        return sorted(found, key=lambda p: (os.path.getmtime(p), p), reverse=True)

    def cleanup_backups(self, path: str) -> int:
        if self.backup_keep <= 0:
            return 0
        removed = 0
        for old in self.list_backups(path)[self.backup_keep:]:
            try:
                os.remove(old)
                removed += 1
            except OSError as e:
                logger.warning(f"Could not remove backup {old}: {e}")
        if removed:
            logger.info(f"Cleaned up {removed} old backup(s) of {path}")
        return removed


class InMemoryConfigStorage(ConfigStorage):
    """Dict-backed storage with a manual clock, for embedding and tests.

    Every save bumps the file's mtime to ``clock + 1`` so writes are always
    observable as a change.
    """

    def __init__(self, files: Optional[Dict[Tuple[str, str], str]] = None):
        self.files: Dict[Tuple[str, str], str] = {}
        self.mtimes: Dict[Tuple[str, str], int] = {}
        self.clock = 1_700_000_000
        self.fail_saves = False
        for (server_id, file_name), text in (files or {}).items():
            self.write_external(server_id, file_name, text)

    @staticmethod
    def _key(server_id: ServerId, file_name: str) -> Tuple[str, str]:
        return str(server_id), normalize_file_name(file_name)

    def _tick(self, key: Tuple[str, str]) -> None:
        self.clock += 1
        self.mtimes[key] = self.clock

    def write_external(self, server_id: ServerId, file_name: str, text: str) -> None:
        """Simulate another process modifying the file."""
        key = self._key(server_id, file_name)
        self.files[key] = text
        self._tick(key)

    def read_config(self, server_id: ServerId, file_name: str) -> str:
        key = self._key(server_id, file_name)
        if key not in self.files:
            raise ConfigNotFoundError(f"No config {key[1]} for server {key[0]}")
        return self.files[key]

    def save_config(self, server_id: ServerId, file_name: str, text: str) -> None:
        if self.fail_saves:
            raise ConfigIOError("Simulated write failure")
        key = self._key(server_id, file_name)
        self.files[key] = text
        self._tick(key)

    def get_config_modified_time(self, server_id: ServerId, file_name: str) -> int:
        return self.mtimes.get(self._key(server_id, file_name), 0)
