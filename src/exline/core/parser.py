"""Recursive-descent parser for one ex command segment.

Grammar of a segment::

    segment  := {':' | ' '} [count] ws name ['!'] [ws lhs] [ws rhs] ['|' | '\\n']
    lhs      := single word, a backslash escapes a space
    rhs      := rest of the segment, a backslash escapes a '|'
"""

from __future__ import annotations

from dataclasses import dataclass

from exline.core.expansion import EXPANSION_CHARS, ArgBuffer, Expander
from exline.core.registry import ArgFlag, CommandCode, CommandDescriptor, CommandRegistry
from exline.core.resolver import (
    SEGMENT_TERMINATORS,
    InputCursor,
    parse_count,
    resolve_command_name,
    skip_whitespace,
)
from exline.errors import TrailingCharactersError, UnknownCommandError

COMMAND_SIGIL = ":"
ESCAPE_CHAR = "\\"


@dataclass
class ParsedCommand:
    """One parsed segment, reset and reused for every segment of a chain."""

    count: int = 0
    descriptor_index: int = -1
    descriptor: CommandDescriptor | None = None
    bang: bool = False
    single_word_arg: str = ""
    multi_word_arg: str = ""
    source: str = ""

    def reset(self) -> None:
        self.count = 0
        self.descriptor_index = -1
        self.descriptor = None
        self.bang = False
        self.single_word_arg = ""
        self.multi_word_arg = ""
        self.source = ""

    @property
    def name(self) -> str:
        return self.descriptor.name if self.descriptor is not None else ""

    @property
    def code(self) -> CommandCode | None:
        return self.descriptor.code if self.descriptor is not None else None


def scan_argument(
    cursor: InputCursor,
    *,
    terminators: str,
    escapable: str,
    expander: Expander | None = None,
) -> str:
    """Collect characters up to the next unescaped terminator.

    A backslash followed by one of ``escapable`` yields that character
    alone. Any other backslash pair is copied through unchanged, and so is a
    trailing backslash.
    """
    buffer = ArgBuffer()
    while not cursor.at_end and cursor.peek() not in terminators:
        char = cursor.peek()
        if char == ESCAPE_CHAR:
            cursor.advance()
            if cursor.at_end:
                buffer.append(ESCAPE_CHAR)
            elif cursor.peek() in escapable:
                buffer.append(cursor.peek())
                cursor.advance()
            else:
                buffer.append(ESCAPE_CHAR + cursor.peek())
                cursor.advance()
        elif expander is not None and char in EXPANSION_CHARS:
            expander.expand(cursor, buffer)
        else:
            buffer.append(char)
            cursor.advance()
    return buffer.value()


def parse_single_word(cursor: InputCursor) -> str:
    return scan_argument(cursor, terminators=" ", escapable=" ")


def parse_multi_word(cursor: InputCursor, expander: Expander | None = None) -> str:
    return scan_argument(cursor, terminators=SEGMENT_TERMINATORS, escapable="|", expander=expander)


def parse_segment(
    cursor: InputCursor,
    registry: CommandRegistry,
    command: ParsedCommand,
    expander: Expander | None = None,
) -> bool:
    """Parse the segment under the cursor into ``command``.

    Returns False when only sigils and blanks were left. Raises
    :class:`~exline.errors.ExParseError` when the segment is invalid; the
    cursor is then left somewhere inside the segment.
    """
    command.reset()

    while cursor.peek() in (COMMAND_SIGIL, " ") and not cursor.at_end:
        cursor.advance()
    if cursor.at_end:
        return False

    start = cursor.pos
    command.count = parse_count(cursor)

    skip_whitespace(cursor)
    resolution = resolve_command_name(cursor, registry)
    if resolution.index is None:
        raise UnknownCommandError(resolution.token)
    descriptor = registry[resolution.index]
    command.descriptor_index = resolution.index
    command.descriptor = descriptor

    if descriptor.allows(ArgFlag.BANG) and cursor.peek() == "!":
        command.bang = True
        cursor.advance()

    skip_whitespace(cursor)
    if descriptor.allows(ArgFlag.LHS):
        command.single_word_arg = parse_single_word(cursor)

    skip_whitespace(cursor)
    if descriptor.allows(ArgFlag.RHS):
        use_expander = expander if descriptor.allows(ArgFlag.EXPAND) else None
        command.multi_word_arg = parse_multi_word(cursor, use_expander)

    skip_whitespace(cursor)
    command.source = cursor.text[start : cursor.pos]
    if cursor.at_end:
        return True
    if cursor.peek() in SEGMENT_TERMINATORS:
        cursor.advance()
        return True
    raise TrailingCharactersError(cursor.rest())
