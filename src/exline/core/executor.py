"""Chain execution of ex command lines."""

from __future__ import annotations

import time
from dataclasses import dataclass

from loguru import logger

from exline.core.collaborators import Collaborators, HistoryKind
from exline.core.commands import default_registry
from exline.core.expansion import Expander
from exline.core.parser import COMMAND_SIGIL, ParsedCommand, parse_segment
from exline.core.registry import CommandRegistry
from exline.core.resolver import InputCursor
from exline.errors import ExError, ExParseError
from exline.session.completion import CompletionSession

SEARCH_FORWARD_SIGIL = "/"
SEARCH_BACKWARD_SIGIL = "?"


@dataclass(frozen=True)
class CommandOutcome:
    """Result of one segment."""

    command: str
    name: str
    status: str
    output: str
    elapsed_ms: int

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class ChainResult:
    """Result of a whole input line."""

    ok: bool
    outcomes: tuple[CommandOutcome, ...] = ()

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        return self.outcomes[-1].output if self.outcomes else ""


class ExInterpreter:
    """Parse and run ex command lines against the collaborators."""

    def __init__(
        self,
        collaborators: Collaborators,
        *,
        registry: CommandRegistry | None = None,
        home_dir: str | None = None,
    ) -> None:
        self._env = collaborators
        self._registry = registry or default_registry()
        self._expander = Expander(
            collaborators.page.current_uri,
            (lambda: home_dir) if home_dir is not None else None,
        )
        self.completion = CompletionSession.for_collaborators(self._registry, collaborators)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def collaborators(self) -> Collaborators:
        return self._env

    def run_string(self, line: str) -> bool:
        """Execute ex syntax, for replayed mappings and other programmatic callers."""
        return self.execute(line).ok

    def execute(self, line: str) -> ChainResult:
        """Run every segment of line in order, stopping at the first failure.

        Segments that already ran keep their effects when a later one fails.
        """
        cursor = InputCursor(line)
        command = ParsedCommand()
        outcomes: list[CommandOutcome] = []

        while not cursor.at_end:
            start = time.monotonic()
            segment_start = cursor.pos
            try:
                if not parse_segment(cursor, self._registry, command, self._expander):
                    break
            except ExParseError as exc:
                logger.debug("ex.parse.error line={!r} error={}", line, exc)
                outcomes.append(
                    CommandOutcome(
                        command=line[segment_start:],
                        name="",
                        status="error",
                        output=str(exc),
                        elapsed_ms=int((time.monotonic() - start) * 1000),
                    )
                )
                return ChainResult(ok=False, outcomes=tuple(outcomes))

            outcome = self._execute_command(command)
            outcomes.append(outcome)
            if not outcome.ok:
                return ChainResult(ok=False, outcomes=tuple(outcomes))

        return ChainResult(ok=True, outcomes=tuple(outcomes))

    def activate(self, text: str) -> ChainResult:
        """Handle a submitted input line according to its leading sigil."""
        sigil, body = text[:1], text[1:]
        if sigil == COMMAND_SIGIL:
            self._env.history.add(HistoryKind.COMMAND, body)
            return self.execute(body)

        if sigil in (SEARCH_FORWARD_SIGIL, SEARCH_BACKWARD_SIGIL):
            self._env.history.add(HistoryKind.SEARCH, body)
            start = time.monotonic()
            self._env.page.search(body, forward=sigil == SEARCH_FORWARD_SIGIL)
            outcome = CommandOutcome(
                command=text,
                name="search",
                status="ok",
                output="",
                elapsed_ms=int((time.monotonic() - start) * 1000),
            )
            return ChainResult(ok=True, outcomes=(outcome,))

        outcome = CommandOutcome(command=text, name="", status="error", output=f"Unknown input: {text}", elapsed_ms=0)
        return ChainResult(ok=False, outcomes=(outcome,))

    def leave(self) -> None:
        """Leave command mode, dropping any completion in progress."""
        self.completion.cancel()

    def _execute_command(self, command: ParsedCommand) -> CommandOutcome:
        descriptor = command.descriptor
        if descriptor is None:
            raise ValueError("command segment was not parsed")
        logger.info(
            "ex.command.start name={} count={} bang={} lhs={!r} rhs={!r}",
            descriptor.name,
            command.count,
            command.bang,
            command.single_word_arg,
            command.multi_word_arg,
        )

        start = time.monotonic()
        try:
            output = descriptor.handler(command, self._env)
            status = "ok"
            text = output or ""
        except ExError as exc:
            logger.warning("ex.command.error name={} error={}", descriptor.name, exc)
            status = "error"
            text = f"{exc!s}"
        finally:
            duration = time.monotonic() - start
            logger.info("ex.command.end name={} duration={:.3f}ms", descriptor.name, duration * 1000)

        return CommandOutcome(
            command=command.source,
            name=descriptor.name,
            status=status,
            output=text,
            elapsed_ms=int(duration * 1000),
        )
