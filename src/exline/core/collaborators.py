"""Interfaces of everything the interpreter calls into.

The interpreter never stores bookmarks, settings or history itself; it only
talks to these protocols. :mod:`exline.core.memory` ships small in-memory
implementations used by the repl and the tests.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class LoadTarget(Enum):
    CURRENT = "current"
    NEW_TAB = "new-tab"


class HistoryKind(Enum):
    COMMAND = "command"
    SEARCH = "search"
    URL = "url"


class Page(Protocol):
    """The document surface commands act on."""

    def current_uri(self) -> str | None: ...

    def current_title(self) -> str | None: ...

    def load(self, target: LoadTarget, text: str) -> None: ...

    def print_document(self) -> None: ...

    def save(self, path: str) -> str: ...

    def eval_script(self, script: str) -> str: ...

    def search(self, text: str, *, forward: bool) -> None: ...


class Application(Protocol):
    def quit(self) -> None: ...


class BookmarkStore(Protocol):
    def add(self, uri: str, title: str, tags: str) -> None: ...

    def remove(self, uri: str) -> None: ...

    def find(self, query: str) -> list[str]: ...

    def tags(self, prefix: str) -> list[str]: ...


class SettingStore(Protocol):
    def apply(self, name: str, value: str | None) -> str: ...

    def names(self, prefix: str) -> list[str]: ...


class ShortcutStore(Protocol):
    def add(self, name: str, template: str) -> None: ...

    def remove(self, name: str) -> None: ...

    def set_default(self, name: str) -> None: ...


class KeyMapper(Protocol):
    def insert(self, lhs: str, rhs: str, mode: str, *, remap: bool) -> None: ...

    def delete(self, lhs: str, mode: str) -> None: ...

    def replay(self, keys: str, *, use_mappings: bool) -> None: ...


class HistoryStore(Protocol):
    def add(self, kind: HistoryKind, text: str) -> None: ...

    def get_list(self, kind: HistoryKind, query: str) -> list[str]:
        """Entries starting with query, newest first."""
        ...


class UriQueue(Protocol):
    def push(self, uri: str) -> int: ...

    def unshift(self, uri: str) -> int: ...

    def pop(self) -> str | None: ...

    def clear(self) -> int: ...


class ProcessRunner(Protocol):
    def run(self, text: str) -> subprocess.CompletedProcess[str]: ...


@dataclass
class Collaborators:
    """Everything a command handler may touch."""

    page: Page
    app: Application
    bookmarks: BookmarkStore
    settings: SettingStore
    shortcuts: ShortcutStore
    keymaps: KeyMapper
    history: HistoryStore
    queue: UriQueue
    runner: ProcessRunner
