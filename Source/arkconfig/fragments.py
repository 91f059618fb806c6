"""Appending generated ini fragments (level ramps, mod settings) to a session's raw text."""
from __future__ import annotations

import logging
from typing import List

from .ini import FRAGMENT_SEPARATOR, compose  # re-export
from .session import ConfigSession

logger = logging.getLogger(__name__)

__all__ = ["FRAGMENT_SEPARATOR", "FragmentComposer", "compose"]


class FragmentComposer:
    def __init__(self, session: ConfigSession):
        self.session = session
        self.history: List[str] = []

    def append(self, fragment: str) -> str:
        """Append to the session's raw buffer and return the new buffer.

        The fragment stays raw text: it is not merged into ``working``, so
        edits made through the structured view survive and repeated keys in
        the fragment are written exactly as generated. It is pending until
        the next save writes it.
        """
        with self.session.lock:
            self.session.append_fragment(fragment)
            text = self.session.raw_text
        self.history.append(fragment)
        logger.info("Appended fragment (%d line(s)) to %s", fragment.count("\n") + 1, self.session.file_id)
        return text
