"""Interactive command line wired to the completion and history sessions."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.patch_stdout import patch_stdout

from exline.cli.render import Renderer
from exline.core.executor import ChainResult, ExInterpreter
from exline.core.parser import COMMAND_SIGIL
from exline.session.history import HistorySession


class ExRepl:
    """Read lines, run them, and drive Tab/Up/Down through the sessions."""

    def __init__(
        self,
        interpreter: ExInterpreter,
        renderer: Renderer,
        *,
        should_exit: Callable[[], bool] = lambda: False,
    ) -> None:
        self._interpreter = interpreter
        self._renderer = renderer
        self._should_exit = should_exit
        self.completion = interpreter.completion
        self.history = HistorySession(interpreter.collaborators.history)
        self._prompt_session: PromptSession[str] | None = None

    def complete(self, text: str, direction: int) -> str | None:
        return self.completion.complete(text, direction)

    def recall(self, text: str, *, older: bool) -> str | None:
        return self.history.recall(text, older=older)

    def cancel(self) -> None:
        self._interpreter.leave()

    def submit(self, text: str) -> ChainResult:
        self.completion.cancel()
        self.history.rewind()
        return self._interpreter.activate(text)

    def _replace(self, buffer: Buffer, text: str | None) -> None:
        if text is None:
            return
        buffer.document = Document(text, cursor_position=len(text))

    def key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("tab")
        def _next(event: KeyPressEvent) -> None:
            self._replace(event.current_buffer, self.complete(event.current_buffer.text, 1))

        @bindings.add("s-tab")
        def _previous(event: KeyPressEvent) -> None:
            self._replace(event.current_buffer, self.complete(event.current_buffer.text, -1))

        @bindings.add("up")
        def _older(event: KeyPressEvent) -> None:
            self._replace(event.current_buffer, self.recall(event.current_buffer.text, older=True))

        @bindings.add("down")
        def _newer(event: KeyPressEvent) -> None:
            self._replace(event.current_buffer, self.recall(event.current_buffer.text, older=False))

        @bindings.add("escape", eager=True)
        def _cancel(event: KeyPressEvent) -> None:
            self.cancel()
            self._replace(event.current_buffer, COMMAND_SIGIL)

        return bindings

    def run(self) -> None:
        if self._prompt_session is None:
            self._prompt_session = PromptSession(key_bindings=self.key_bindings())
        while not self._should_exit():
            try:
                with patch_stdout(raw=True):
                    text = self._prompt_session.prompt("", default=COMMAND_SIGIL)
            except (EOFError, KeyboardInterrupt):
                break
            if not text.strip() or text == COMMAND_SIGIL:
                continue
            result = self.submit(text)
            self._renderer.chain_result(result)
        logger.debug("repl.exit")
