"""Inline expansion of ``%`` and ``~/`` inside multi-word arguments."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from exline.core.resolver import InputCursor

EXPANSION_CHARS = "%~"


class ArgBuffer:
    """Append-only text accumulator for one argument."""

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def value(self) -> str:
        return "".join(self._parts)


class Expander:
    """Substitute placeholders while an argument is scanned.

    ``%`` becomes the identifier of the current resource, or nothing when no
    resource is loaded. ``~`` becomes the home directory only when directly
    followed by ``/``; ``~user`` is kept as literal text.
    """

    def __init__(
        self,
        current_uri: Callable[[], str | None],
        home_dir: Callable[[], str] | None = None,
    ) -> None:
        self._current_uri = current_uri
        self._home_dir = home_dir or (lambda: str(Path.home()))

    def expand(self, cursor: InputCursor, buffer: ArgBuffer) -> None:
        """Expand the placeholder under the cursor and move past it."""
        char = cursor.peek()
        if char == "%":
            buffer.append(self._current_uri() or "")
            cursor.advance()
        elif char == "~":
            if cursor.peek(1) == "/":
                buffer.append(self._home_dir())
                buffer.append("/")
                cursor.advance(2)
            else:
                buffer.append("~")
                cursor.advance()
        else:
            raise ValueError(f"not an expansion character: {char!r}")
