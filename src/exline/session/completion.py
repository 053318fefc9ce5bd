"""Tab-completion cycling over the command line."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from loguru import logger

from exline.core.collaborators import Collaborators, HistoryKind
from exline.core.parser import COMMAND_SIGIL
from exline.core.registry import CommandCode, CommandRegistry
from exline.core.resolver import InputCursor, parse_count, resolve_command_name, skip_whitespace

SEARCH_SIGILS = "/?"


@dataclass(frozen=True)
class CandidateSource:
    """Produces candidates for a query; sorted sources are ordered lexicographically."""

    fetch: Callable[[str], Iterable[str]]
    sort: bool = False

    def candidates(self, query: str) -> list[str]:
        found = list(self.fetch(query))
        return sorted(found) if self.sort else found


def default_argument_sources(env: Collaborators) -> dict[CommandCode, CandidateSource]:
    def open_candidates(query: str) -> list[str]:
        if query.startswith("!"):
            return env.bookmarks.find(query[1:])
        return env.history.get_list(HistoryKind.URL, query)

    open_source = CandidateSource(open_candidates)
    return {
        CommandCode.OPEN: open_source,
        CommandCode.TABOPEN: open_source,
        CommandCode.SET: CandidateSource(env.settings.names, sort=True),
        CommandCode.BMA: CandidateSource(env.bookmarks.tags, sort=True),
    }


def default_search_source(env: Collaborators) -> CandidateSource:
    return CandidateSource(lambda query: env.history.get_list(HistoryKind.SEARCH, query), sort=True)


@dataclass(frozen=True)
class _Classification:
    prefix: str
    count: int
    candidates: list[str]


class CompletionSession:
    """One completion interaction at a time.

    The session is active while it has written a line back to the input.
    A request on exactly that line steps to the next or previous
    candidate; any other line ends the session and starts a new one from
    the edited text.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        argument_sources: Mapping[CommandCode, CandidateSource] | None = None,
        search_source: CandidateSource | None = None,
    ) -> None:
        self._registry = registry
        self._argument_sources = dict(argument_sources or {})
        self._search_source = search_source
        self._prefix = ""
        self._count = 0
        self._candidates: list[str] = []
        self._index = -1
        self._displayed = ""

    @classmethod
    def for_collaborators(cls, registry: CommandRegistry, env: Collaborators) -> CompletionSession:
        return cls(registry, default_argument_sources(env), default_search_source(env))

    @property
    def active(self) -> bool:
        return bool(self._displayed)

    @property
    def displayed_text(self) -> str:
        return self._displayed

    @property
    def reconstruction_prefix(self) -> str:
        return self._prefix

    @property
    def leading_count(self) -> int:
        return self._count

    @property
    def candidates(self) -> tuple[str, ...]:
        return tuple(self._candidates)

    @property
    def selected(self) -> str | None:
        if 0 <= self._index < len(self._candidates):
            return self._candidates[self._index]
        return None

    def complete(self, text: str, direction: int = 1) -> str | None:
        """Start or advance completion of text.

        Returns the line to show, or None when nothing matches. A direction
        of 0 cancels the session.
        """
        if direction == 0:
            self.cancel()
            return None

        if self.active:
            if text == self._displayed:
                return self._select(self._index + (1 if direction > 0 else -1))
            logger.debug("completion.reset displayed={!r} input={!r}", self._displayed, text)
            self.cancel()

        classification = self._classify(text)
        if classification is None or not classification.candidates:
            return None

        self._prefix = classification.prefix
        self._count = classification.count
        self._candidates = classification.candidates
        logger.debug("completion.start prefix={!r} candidates={}", self._prefix, len(self._candidates))
        return self._select(len(self._candidates) - 1 if direction < 0 else 0)

    def cancel(self) -> None:
        self._prefix = ""
        self._count = 0
        self._candidates = []
        self._index = -1
        self._displayed = ""

    def _select(self, index: int) -> str:
        self._index = index % len(self._candidates)
        count = str(self._count) if self._count else ""
        self._displayed = f"{self._prefix}{count}{self._candidates[self._index]}"
        return self._displayed

    def _classify(self, text: str) -> _Classification | None:
        if text.startswith(COMMAND_SIGIL):
            return self._classify_command(text)

        if text[:1] and text[:1] in SEARCH_SIGILS:
            if self._search_source is None:
                return None
            return _Classification(prefix=text[:1], count=0, candidates=self._search_source.candidates(text[1:]))

        return None

    def _classify_command(self, text: str) -> _Classification:
        cursor = InputCursor(text, 1)
        skip_whitespace(cursor)
        count = parse_count(cursor)
        skip_whitespace(cursor)
        name_start = cursor.pos

        resolution = resolve_command_name(cursor, self._registry)
        if resolution.index is not None and cursor.peek() == " ":
            prefix = text[: cursor.pos + 1]
            skip_whitespace(cursor)
            source = self._argument_sources.get(self._registry[resolution.index].code)
            candidates = source.candidates(cursor.rest()) if source is not None else []
            return _Classification(prefix=prefix, count=0, candidates=candidates)

        names = self._registry.fill_completion(text[name_start:])
        return _Classification(prefix=COMMAND_SIGIL, count=count, candidates=names)
