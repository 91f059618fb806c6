"""
Change-tracking edit session for a single config file.

A session keeps two copies of the parsed document: ``original`` (what is on
disk as far as the editor knows) and ``working`` (what the user is editing).
Edits only ever touch ``working``; ``original`` is replaced on load, on commit
after a successful save, and on reconciliation with an externally modified
file.

Generated fragments are kept apart from both copies as pending raw text.
They are part of ``raw_text`` and of what ``render_raw`` produces for a save,
but they never replace the structured edits in ``working``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from .ini import ConfigDocument, compose, copy_document, get_value, parse, serialize, update_text
from .schema import ConfigGroup, FieldSchema, Schema, iter_fields

if TYPE_CHECKING:
    from .presets import Preset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigFileId:
    """Identifies the file a session edits: a server and a logical file name."""
    server_id: Union[int, str]
    file_name: str

    def __str__(self) -> str:
        return f"{self.server_id}:{self.file_name}"


class SessionObserver:
    """Interface for session change observers."""

    def on_session_loaded(self, session: "ConfigSession") -> None:
        """Called after load() replaced both copies."""
        pass

    def on_setting_changed(self, session: "ConfigSession", section: str, key: str, value: str) -> None:
        """Called after a single working value changed."""
        pass

    def on_session_committed(self, session: "ConfigSession", mtime: Optional[int]) -> None:
        """Called after commit(); mtime is the timestamp produced by the save, if known."""
        pass

    def on_session_reloaded(self, session: "ConfigSession", discarded_changes: bool) -> None:
        """Called after the document was replaced from an external change."""
        pass


class ConfigSession:
    """Original/working pair for one config file.

    All mutation happens under ``lock``; the external-change watcher holds the
    same lock while it swaps in reloaded text.
    """

    def __init__(self, file_id: Optional[ConfigFileId] = None, raw_text: str = ""):
        self.file_id = file_id
        self.lock = threading.RLock()
        self._observers: List[SessionObserver] = []
        self.original: ConfigDocument = {}
        self.working: ConfigDocument = {}
        self._base_text = ""
        self.fragments: List[str] = []
        if raw_text:
            self.load(raw_text)

    # --- Observers ---
    def add_observer(self, observer: SessionObserver) -> None:
        with self.lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def remove_observer(self, observer: SessionObserver) -> None:
        with self.lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def _notify(self, method: str, *args) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, method)(self, *args)
            except Exception as e:
                logger.error(f"Observer notification failed ({method}): {e}")

    # --- Loading ---
    def load(self, raw_text: str) -> None:
        """Replace both copies with the parsed text."""
        doc = parse(raw_text)
        with self.lock:
            self._base_text = raw_text
            self.fragments = []
            self.original = copy_document(doc)
            self.working = copy_document(doc)
            logger.debug("Loaded %s: %d section(s)", self.file_id, len(doc))
            self._notify("on_session_loaded")

    def replace_from_text(self, raw_text: str) -> bool:
        """Reconcile with externally modified text.

        Uncommitted edits are discarded; disk is treated as the source of
        truth. Returns True when local changes were thrown away.
        """
        doc = parse(raw_text)
        with self.lock:
            discarded = self.has_changes()
            if discarded:
                logger.warning("External change to %s discarded uncommitted edits", self.file_id)
            self._base_text = raw_text
            self.fragments = []
            self.original = copy_document(doc)
            self.working = copy_document(doc)
            self._notify("on_session_reloaded", discarded)
        return discarded

    # --- Reading ---
    def get_setting(self, section: str, key: str, default: str = "") -> str:
        with self.lock:
            return get_value(self.working, section, key, default)

    def get_original(self, section: str, key: str, default: str = "") -> str:
        with self.lock:
            return get_value(self.original, section, key, default)

    def is_modified(self, section: str, key: str) -> bool:
        with self.lock:
            return get_value(self.working, section, key) != get_value(self.original, section, key)

    def has_changes(self) -> bool:
        with self.lock:
            return self.working != self.original or bool(self.fragments)

    def modified_fields(self, schema: Optional[Schema]) -> List[FieldSchema]:
        if not schema:
            return []
        with self.lock:
            return [f for f in iter_fields(schema) if self.is_modified(f.section, f.key)]

    def modified_count(self, schema_or_group: Union[Schema, ConfigGroup, None]) -> int:
        """Number of modified fields, for display next to a schema or a single group."""
        if schema_or_group is None:
            return 0
        if isinstance(schema_or_group, ConfigGroup):
            fields: Iterable[FieldSchema] = schema_or_group.fields
        else:
            fields = iter_fields(schema_or_group)
        with self.lock:
            return sum(1 for f in fields if self.is_modified(f.section, f.key))

    # --- Editing ---
    def update_setting(self, section: str, key: str, value: str) -> None:
        with self.lock:
            self.working.setdefault(section, {})[key] = value
            self._notify("on_setting_changed", section, key, value)

    def revert_setting(self, section: str, key: str) -> None:
        """Restore a single value to its original state."""
        with self.lock:
            if key in self.original.get(section, {}):
                self.working.setdefault(section, {})[key] = self.original[section][key]
            elif key in self.working.get(section, {}):
                del self.working[section][key]
                if not self.working[section] and section not in self.original:
                    del self.working[section]
            self._notify("on_setting_changed", section, key, self.get_setting(section, key))

    def discard_changes(self) -> None:
        with self.lock:
            self.working = copy_document(self.original)
            self.fragments = []

    def apply_preset(self, preset: "Preset") -> int:
        """Overwrite every key named by the preset; returns the number of keys written."""
        written = 0
        with self.lock:
            for section, settings in preset.settings.items():
                target = self.working.setdefault(section, {})
                for key, value in settings.items():
                    target[key] = value
                    written += 1
        logger.info("Applied preset %r to %s (%d key(s))", preset.name, self.file_id, written)
        return written

    def reset_group(self, group: ConfigGroup) -> int:
        """Set every field of the group that declares a default back to it."""
        written = 0
        with self.lock:
            for field in group.fields:
                if field.default_value:
                    self.working.setdefault(field.section, {})[field.key] = field.default_value
                    written += 1
        logger.info("Reset group %r on %s (%d field(s))", group.title, self.file_id, written)
        return written

    # --- Raw text ---
    @property
    def raw_text(self) -> str:
        """Text as last loaded or saved, followed by any pending fragments."""
        with self.lock:
            text = self._base_text
            for fragment in self.fragments:
                text = compose(text, fragment)
            return text

    @property
    def has_pending_fragments(self) -> bool:
        with self.lock:
            return bool(self.fragments)

    def append_fragment(self, fragment: str) -> None:
        """Queue raw text to be written after the document; ``working`` is untouched."""
        with self.lock:
            self.fragments.append(fragment)

    def render_raw(self) -> str:
        """Raw text carrying both the structured edits and the pending fragments.

        Edits are written into the loaded text line by line, so comments and
        repeated keys outside the edited values are preserved.
        """
        with self.lock:
            text = update_text(self._base_text, self.working)
            for fragment in self.fragments:
                text = compose(text, fragment)
            return text

    def replace_working_from_text(self, raw_text: str) -> None:
        """Re-parse the working copy from an edited raw buffer; original is untouched.

        The buffer replaces the pending fragments along with the loaded text.
        """
        doc = parse(raw_text)
        with self.lock:
            self._base_text = raw_text
            self.fragments = []
            self.working = doc

    # --- Saving ---
    def serialize_for_save(self) -> str:
        with self.lock:
            return serialize(self.working)

    def commit(self, mtime: Optional[int] = None, saved_text: Optional[str] = None) -> None:
        """Rebase ``original`` on the working copy after a successful write.

        ``mtime`` is the modification time produced by that write; observers
        (the external-change watcher) use it as their new baseline inside the
        same critical section.
        """
        with self.lock:
            self.original = copy_document(self.working)
            self._base_text = saved_text if saved_text is not None else serialize(self.working)
            self.fragments = []
            self._notify("on_session_committed", mtime)
            logger.debug("Committed %s (mtime=%s)", self.file_id, mtime)
