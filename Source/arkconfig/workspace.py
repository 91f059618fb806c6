"""
Application state for the config editor.

``ConfigWorkspace`` owns the active session and its external-change watcher.
Opening another file stops the previous watcher before anything else happens,
so at most one watcher is ever running per workspace.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .errors import ConfigIOError
from .fragments import FragmentComposer
from .presets import PresetEngine
from .schema import GameVariant, Schema, SchemaRegistry, default_registry, normalize_file_name
from .session import ConfigFileId, ConfigSession
from .storage import ConfigStorage
from .validation import ValidationResult, validate_document
from .watcher import ExternalChangeWatcher

logger = logging.getLogger(__name__)


class ConfigWorkspace:
    def __init__(self, storage: ConfigStorage, variant: Union[GameVariant, str] = GameVariant.ASA,
                 poll_interval: Optional[float] = None, auto_sync: bool = True,
                 registry: Optional[SchemaRegistry] = None):
        self.storage = storage
        self.variant = GameVariant.coerce(variant)
        self.poll_interval = poll_interval
        self.auto_sync = auto_sync
        self.registry = registry or default_registry()
        self.presets = PresetEngine()
        self.session: Optional[ConfigSession] = None
        self.watcher: Optional[ExternalChangeWatcher] = None
        self.composer: Optional[FragmentComposer] = None

    def __enter__(self) -> "ConfigWorkspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def file_id(self) -> Optional[ConfigFileId]:
        return self.session.file_id if self.session else None

    @property
    def schema(self) -> Optional[Schema]:
        if self.session is None or self.session.file_id is None:
            return None
        return self.registry.get_schema(self.variant, self.session.file_id.file_name)

    def _require_session(self) -> ConfigSession:
        if self.session is None:
            raise RuntimeError("No config file is open")
        return self.session

    def open(self, server_id: Union[int, str], file_name: str) -> ConfigSession:
        """Load a config file into a fresh session and start watching it."""
        self._stop_watcher()

        file_id = ConfigFileId(server_id, normalize_file_name(file_name))
        text = self.storage.read_config(file_id.server_id, file_id.file_name)
        session = ConfigSession(file_id)
        session.load(text)
        mtime = self.storage.get_config_modified_time(file_id.server_id, file_id.file_name)

        self.session = session
        self.composer = FragmentComposer(session)
        self.watcher = ExternalChangeWatcher(self.storage, file_id, session,
                                             interval=self.poll_interval, last_known_mtime=mtime)
        if self.auto_sync:
            self.watcher.start()
        if self.schema is None:
            logger.info("No structured schema for %s, raw editing only", file_id)
        logger.info("Opened %s (%d bytes, mtime %s)", file_id, len(text), mtime)
        return session

    def render_save(self, use_raw: bool = False) -> str:
        """Text that ``save(use_raw)`` would write.

        Raw rendering keeps repeated keys and comments, so it is used whenever
        a fragment is pending even if ``use_raw`` is not set.
        """
        session = self._require_session()
        with session.lock:
            if use_raw or session.has_pending_fragments:
                return session.render_raw()
            return session.serialize_for_save()

    def save(self, use_raw: bool = False) -> int:
        """Write the working copy (or the raw buffer) and rebase the session on it.

        Returns the modification time reported after the write. On failure
        the session is left exactly as it was and ``ConfigIOError`` propagates.
        """
        session = self._require_session()
        file_id = session.file_id
        with session.lock:
            raw = use_raw or session.has_pending_fragments
            text = self.render_save(use_raw)
            try:
                self.storage.save_config(file_id.server_id, file_id.file_name, text)
            except ConfigIOError:
                logger.error("Saving %s failed; working copy kept", file_id)
                raise
            mtime = self.storage.get_config_modified_time(file_id.server_id, file_id.file_name)
            if raw:
                session.replace_working_from_text(text)
            session.commit(mtime, saved_text=text)
        logger.info("Saved %s", file_id)
        return mtime

    def reload(self) -> None:
        """Re-read the file, discarding uncommitted edits."""
        session = self._require_session()
        file_id = session.file_id
        with session.lock:
            text = self.storage.read_config(file_id.server_id, file_id.file_name)
            session.load(text)
            if self.watcher is not None:
                self.watcher.sync_baseline(
                    self.storage.get_config_modified_time(file_id.server_id, file_id.file_name))

    def apply_fragment(self, fragment: str) -> str:
        self._require_session()
        return self.composer.append(fragment)

    def apply_preset(self, name: str) -> int:
        return self.presets.apply(self._require_session(), name)

    def validate(self) -> ValidationResult:
        session = self._require_session()
        with session.lock:
            result = validate_document(session.working, self.schema)
        for issue in result.issues:
            logger.warning("%s: %s (%s)", issue.path, issue.message, issue.actual)
        return result

    def _stop_watcher(self) -> None:
        if self.watcher is not None:
            self.watcher.detach()
            self.watcher = None

    def close(self) -> None:
        self._stop_watcher()
        self.session = None
        self.composer = None
