"""In-memory collaborators for the repl and tests."""

from __future__ import annotations

import shlex
import subprocess
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from exline.core.collaborators import Collaborators, HistoryKind, LoadTarget
from exline.errors import CollaboratorError, ScriptError


@dataclass
class MemoryHistory:
    """Per-kind history, oldest first, without duplicates."""

    max_items: int = 500
    items: dict[HistoryKind, list[str]] = field(default_factory=lambda: {kind: [] for kind in HistoryKind})

    def add(self, kind: HistoryKind, text: str) -> None:
        if not text:
            return
        entries = self.items.setdefault(kind, [])
        if text in entries:
            entries.remove(text)
        entries.append(text)
        del entries[: max(0, len(entries) - self.max_items)]

    def get_list(self, kind: HistoryKind, query: str) -> list[str]:
        return [entry for entry in reversed(self.items.get(kind, [])) if entry.startswith(query)]


@dataclass
class Tab:
    uri: str
    title: str = ""


@dataclass
class MemoryPage:
    """A list of tabs; the first one is the current tab."""

    history: MemoryHistory | None = None
    tabs: list[Tab] = field(default_factory=list)
    printed: int = 0
    saved: list[str] = field(default_factory=list)
    searches: list[tuple[str, bool]] = field(default_factory=list)
    scripts: dict[str, str] = field(default_factory=dict)
    home_page: str = "about:blank"

    def current_uri(self) -> str | None:
        return self.tabs[0].uri if self.tabs else None

    def current_title(self) -> str | None:
        return self.tabs[0].title if self.tabs else None

    def load(self, target: LoadTarget, text: str) -> None:
        uri = text.strip() or self.home_page
        if " " in uri:
            raise CollaboratorError(f"Could not load: {uri}")
        if target is LoadTarget.CURRENT and self.tabs:
            self.tabs[0] = Tab(uri=uri)
        else:
            self.tabs.append(Tab(uri=uri))
        if self.history is not None:
            self.history.add(HistoryKind.URL, uri)
        logger.debug("page.load target={} uri={}", target.value, uri)

    def print_document(self) -> None:
        if not self.tabs:
            raise CollaboratorError("Nothing to print")
        self.printed += 1

    def save(self, path: str) -> str:
        uri = self.current_uri()
        if uri is None:
            raise CollaboratorError("Nothing to save")
        target = path or Path(uri.rstrip("/")).name or "index.html"
        self.saved.append(target)
        return target

    def eval_script(self, script: str) -> str:
        if script not in self.scripts:
            raise ScriptError(f"ReferenceError: {script}")
        return self.scripts[script]

    def search(self, text: str, *, forward: bool) -> None:
        self.searches.append((text, forward))


@dataclass
class MemoryApplication:
    quit_requested: bool = False

    def quit(self) -> None:
        self.quit_requested = True


@dataclass
class Bookmark:
    uri: str
    title: str
    tags: tuple[str, ...]


@dataclass
class MemoryBookmarks:
    bookmarks: list[Bookmark] = field(default_factory=list)

    def add(self, uri: str, title: str, tags: str) -> None:
        self.bookmarks = [item for item in self.bookmarks if item.uri != uri]
        self.bookmarks.append(Bookmark(uri=uri, title=title, tags=tuple(tags.split())))

    def remove(self, uri: str) -> None:
        remaining = [item for item in self.bookmarks if item.uri != uri]
        if len(remaining) == len(self.bookmarks):
            raise CollaboratorError(f"No bookmark for {uri}")
        self.bookmarks = remaining

    def find(self, query: str) -> list[str]:
        """Bookmarks carrying every tag of the query."""
        wanted = query.split()
        return [item.uri for item in self.bookmarks if all(tag in item.tags for tag in wanted)]

    def tags(self, prefix: str) -> list[str]:
        found = {tag for item in self.bookmarks for tag in item.tags if tag.startswith(prefix)}
        return list(found)


@dataclass
class MemorySettings:
    values: dict[str, bool | int | str] = field(
        default_factory=lambda: {
            "cookie-accept": "always",
            "hint-timeout": 0,
            "history-max-items": 500,
            "home-page": "about:blank",
            "scripts": True,
            "stylesheet": True,
            "useragent": "exline",
        }
    )

    def apply(self, name: str, value: str | None) -> str:
        toggle = query = False
        if value is None and name.endswith("!"):
            name, toggle = name[:-1], True
        elif value is None and name.endswith("?"):
            name, query = name[:-1], True
        if name not in self.values:
            raise CollaboratorError(f"Config '{name}' not found")

        current = self.values[name]
        if query:
            return f"{name}={current}"
        if isinstance(current, bool):
            if toggle:
                self.values[name] = not current
            elif value is None:
                self.values[name] = True
            elif value in ("true", "false"):
                self.values[name] = value == "true"
            else:
                raise CollaboratorError(f"Could not set {name} to '{value}'")
        elif value is None:
            return f"{name}={current}"
        elif isinstance(current, int):
            try:
                self.values[name] = int(value)
            except ValueError as exc:
                raise CollaboratorError(f"Could not set {name} to '{value}'") from exc
        else:
            self.values[name] = value
        return ""

    def names(self, prefix: str) -> list[str]:
        return [name for name in self.values if name.startswith(prefix)]


@dataclass
class MemoryShortcuts:
    templates: dict[str, str] = field(default_factory=dict)
    default: str | None = None

    def add(self, name: str, template: str) -> None:
        if not name or not template:
            raise CollaboratorError("Shortcut needs a name and a template")
        self.templates[name] = template

    def remove(self, name: str) -> None:
        if self.templates.pop(name, None) is None:
            raise CollaboratorError(f"No shortcut {name}")
        if self.default == name:
            self.default = None

    def set_default(self, name: str) -> None:
        if name not in self.templates:
            raise CollaboratorError(f"No shortcut {name}")
        self.default = name


@dataclass
class MemoryKeyMapper:
    mappings: dict[tuple[str, str], tuple[str, bool]] = field(default_factory=dict)
    replayed: list[tuple[str, bool]] = field(default_factory=list)

    def insert(self, lhs: str, rhs: str, mode: str, *, remap: bool) -> None:
        self.mappings[(mode, lhs)] = (rhs, remap)

    def delete(self, lhs: str, mode: str) -> None:
        if self.mappings.pop((mode, lhs), None) is None:
            raise CollaboratorError(f"No such mapping: {lhs}")

    def replay(self, keys: str, *, use_mappings: bool) -> None:
        self.replayed.append((keys, use_mappings))


@dataclass
class MemoryQueue:
    items: deque[str] = field(default_factory=deque)

    def push(self, uri: str) -> int:
        self.items.append(uri)
        return len(self.items)

    def unshift(self, uri: str) -> int:
        self.items.appendleft(uri)
        return len(self.items)

    def pop(self) -> str | None:
        return self.items.popleft() if self.items else None

    def clear(self) -> int:
        count = len(self.items)
        self.items.clear()
        return count


class SubprocessRunner:
    """Run a line through the configured shell and wait for it."""

    def __init__(self, shell_command: str = "/bin/sh -c") -> None:
        self._shell_command = shell_command

    def argv(self, text: str) -> list[str]:
        # raises ValueError on unbalanced quotes
        return [*shlex.split(self._shell_command), text]

    def run(self, text: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(  # noqa: S603
            self.argv(text),
            capture_output=True,
            text=True,
        )


def memory_collaborators(*, shell_command: str = "/bin/sh -c", history_max_items: int = 500) -> Collaborators:
    history = MemoryHistory(max_items=history_max_items)
    return Collaborators(
        page=MemoryPage(history=history),
        app=MemoryApplication(),
        bookmarks=MemoryBookmarks(),
        settings=MemorySettings(),
        shortcuts=MemoryShortcuts(),
        keymaps=MemoryKeyMapper(),
        history=history,
        queue=MemoryQueue(),
        runner=SubprocessRunner(shell_command),
    )
