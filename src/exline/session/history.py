"""Recall of previously entered command and search lines."""

from __future__ import annotations

from loguru import logger

from exline.core.collaborators import HistoryKind, HistoryStore
from exline.core.parser import COMMAND_SIGIL

SEARCH_SIGILS = "/?"


class HistorySession:
    """Walk through past lines matching what was typed before the first recall.

    The list starts with the typed query itself followed by matching entries,
    newest first, so stepping back past the newest entry restores the
    original input. The cursor never wraps.
    """

    def __init__(self, store: HistoryStore) -> None:
        self._store = store
        self._sigil = ""
        self._entries: list[str] = []
        self._cursor = 0

    @property
    def active(self) -> bool:
        return bool(self._entries)

    @property
    def sigil_prefix(self) -> str:
        return self._sigil

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_text(self) -> str:
        if not self._entries:
            return ""
        return f"{self._sigil}{self._entries[self._cursor]}"

    def recall(self, text: str, *, older: bool = True) -> str | None:
        """Step to an older or newer entry; None when no history matches."""
        if self.active and text != self.current_text:
            logger.debug("history.rewind displayed={!r} input={!r}", self.current_text, text)
            self.rewind()

        if not self.active and not self._start(text):
            return None

        if older:
            if self._cursor + 1 < len(self._entries):
                self._cursor += 1
        elif self._cursor > 0:
            self._cursor -= 1
        return self.current_text

    def rewind(self) -> None:
        self._sigil = ""
        self._entries = []
        self._cursor = 0

    def _start(self, text: str) -> bool:
        stripped = text.lstrip(" ")
        sigil, query = stripped[:1], stripped[1:]
        if sigil == COMMAND_SIGIL:
            kind = HistoryKind.COMMAND
        elif sigil and sigil in SEARCH_SIGILS:
            # forward and backward search share one list
            kind = HistoryKind.SEARCH
        else:
            return False

        matches = self._store.get_list(kind, query)
        if not matches:
            return False
        self._sigil = sigil
        self._entries = [query, *matches]
        self._cursor = 0
        logger.debug("history.start kind={} query={!r} entries={}", kind.value, query, len(matches))
        return True
