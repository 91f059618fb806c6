"""
External-change watcher for config files.

Polls the storage collaborator for the file's modification time and silently
reloads the owning session when it changes, so edits made by the server
process or by hand show up in the editor. Runs as a single background
thread per session with an explicit stop handle.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Optional

from . import config
from .session import ConfigFileId, ConfigSession, SessionObserver
from .storage import ConfigStorage

logger = logging.getLogger(__name__)


class WatcherState(Enum):
    """Watcher lifecycle states."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class ExternalChangeWatcher(SessionObserver):
    """
    Reconciles a ConfigSession with changes made to its file outside the editor.

    Each tick compares the storage mtime with the last known one. A positive,
    different value triggers a reload that replaces both the original and the
    working copy. Uncommitted local edits are lost in that case: the file on
    disk wins.

    The watcher registers itself as an observer of the session so that a
    commit after the user's own save moves the baseline to the mtime of that
    write, under the session lock.
    """

    def __init__(self, storage: ConfigStorage, file_id: ConfigFileId, session: ConfigSession,
                 interval: Optional[float] = None, last_known_mtime: int = 0):
        """
        Args:
            storage: Collaborator providing read_config/get_config_modified_time
            file_id: Server and file to watch
            session: Session to reload on external change
            interval: Seconds between checks (default: config.POLL_INTERVAL)
            last_known_mtime: Baseline mtime, usually fetched right after load
        """
        self._storage = storage
        self.file_id = file_id
        self.session = session
        self.interval = config.POLL_INTERVAL if interval is None else interval
        self.last_known_mtime = last_known_mtime
        self.reload_count = 0
        self.failed_polls = 0

        self._state = WatcherState.IDLE
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

        session.add_observer(self)

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sync_baseline(self, mtime: int) -> None:
        """Adopt ``mtime`` as the last known modification time."""
        with self.session.lock:
            self.last_known_mtime = mtime

    # --- SessionObserver ---
    def on_session_committed(self, session: ConfigSession, mtime: Optional[int]) -> None:
        if mtime:
            self.last_known_mtime = mtime
            logger.debug("Watcher baseline for %s moved to %s after save", self.file_id, mtime)

    # --- Polling ---
    def poll_once(self) -> bool:
        """Run a single check. Returns True when the session was reloaded."""
        # Saves commit their mtime under the same lock
        with self.session.lock:
            try:
                mtime = self._storage.get_config_modified_time(self.file_id.server_id, self.file_id.file_name)
            except Exception as e:
                self.failed_polls += 1
                logger.warning(f"Failed to check config modification time for {self.file_id}: {e}")
                return False
            if not mtime or mtime <= 0 or mtime == self.last_known_mtime:
                return False
            baseline = self.last_known_mtime

        # Read without the session lock held
        try:
            text = self._storage.read_config(self.file_id.server_id, self.file_id.file_name)
        except Exception as e:
            with self.session.lock:
                if self.last_known_mtime == baseline:
                    self.last_known_mtime = mtime
            logger.error(f"Reload of {self.file_id} failed: {e}")
            return False

        with self.session.lock:
            if self.last_known_mtime != baseline:
                # A save committed while the file was being read
                logger.debug("Skipping reload of %s, baseline moved to %s", self.file_id, self.last_known_mtime)
                return False
            logger.info("Config file %s updated externally (mtime %s -> %s), reloading",
                        self.file_id, baseline, mtime)
            self.last_known_mtime = mtime
            self.session.replace_from_text(text)
            self.reload_count += 1
        return True

    def start(self) -> None:
        """Start polling in a background thread."""
        if self.is_running:
            return  # Already watching
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop, name=f"config-watcher-{self.file_id}", daemon=True
        )
        self._state = WatcherState.RUNNING
        self._thread.start()
        logger.info("Watching %s every %ss", self.file_id, self.interval)

    def stop(self, timeout: float = 5.0) -> None:
        """Stop polling and wait for the thread to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        if self._state == WatcherState.RUNNING:
            logger.info("Stopped watching %s", self.file_id)
        self._state = WatcherState.STOPPED

    def detach(self) -> None:
        """Stop and unregister from the session; the watcher is unusable afterwards."""
        self.stop()
        self.session.remove_observer(self)

    def _watch_loop(self) -> None:
        """Main polling loop (runs in background thread)."""
        logger.debug("Watch loop for %s started", self.file_id)
        while not self._stop_event.is_set():
            # Wait for check interval or stop signal
            if self._stop_event.wait(self.interval):
                break
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Error in config watch loop for {self.file_id}: {e}")
        logger.debug("Watch loop for %s stopped", self.file_id)
