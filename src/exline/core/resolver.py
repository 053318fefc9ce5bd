"""Side-effect-free primitives shared by the parser and the sessions.

Everything here works on an :class:`InputCursor` and never touches a
collaborator, so the line parser, the completion session and the history
session can all reuse it.
"""

from __future__ import annotations

from dataclasses import dataclass

from exline.core.registry import ArgFlag, CommandDescriptor, CommandRegistry

SEGMENT_TERMINATORS = "|\n"


class InputCursor:
    """Read position over one input line."""

    __slots__ = ("pos", "text")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index >= len(self.text):
            return ""
        return self.text[index]

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def rest(self) -> str:
        return self.text[self.pos :]

    def __repr__(self) -> str:
        return f"InputCursor({self.text!r}, pos={self.pos})"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a typed command name."""

    index: int | None
    token: str

    @property
    def ok(self) -> bool:
        return self.index is not None


def skip_whitespace(cursor: InputCursor) -> None:
    while cursor.peek() == " ":
        cursor.advance()


def parse_count(cursor: InputCursor) -> int:
    """Consume a leading decimal number, 0 when there is none."""
    count = 0
    while cursor.peek().isdigit() and cursor.peek().isascii():
        count = count * 10 + int(cursor.peek())
        cursor.advance()
    return count


def _ends_name(char: str, descriptor: CommandDescriptor) -> bool:
    if char == " " or char in SEGMENT_TERMINATORS:
        return True
    return char == "!" and descriptor.allows(ArgFlag.BANG)


def resolve_command_name(cursor: InputCursor, registry: CommandRegistry) -> Resolution:
    """Match the abbreviation under the cursor against the registry.

    Characters are consumed one at a time while at least one command name
    still agrees with everything typed so far. The name ends at a space, a
    segment terminator, a ``!`` for commands taking a bang, or the end of
    input; the first declared of the remaining candidates wins. When nothing
    matches, the cursor is moved to the end of the word and the consumed
    word is returned as the token for the error message.
    """
    start = cursor.pos
    candidates = list(range(len(registry)))
    depth = 0

    while not cursor.at_end:
        char = cursor.peek()
        if depth and _ends_name(char, registry[candidates[0]]):
            break
        candidates = [
            index for index in candidates if len(registry[index].name) > depth and registry[index].name[depth] == char
        ]
        cursor.advance()
        depth += 1
        if not candidates:
            while not cursor.at_end and cursor.peek() != " ":
                cursor.advance()
            return Resolution(index=None, token=cursor.text[start : cursor.pos])

    token = cursor.text[start : cursor.pos]
    if not depth:
        return Resolution(index=None, token=token)
    return Resolution(index=candidates[0], token=token)
