"""Command descriptors and the declaration-ordered registry."""

from __future__ import annotations

import builtins
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from exline.core.parser import ParsedCommand

CommandHandler: TypeAlias = Callable[["ParsedCommand", Any], str | None]


class CommandCode(Enum):
    """Unique tag of every built-in command."""

    BMA = "bma"
    BMR = "bmr"
    CMAP = "cmap"
    CNOREMAP = "cnoremap"
    CUNMAP = "cunmap"
    HARDCOPY = "hardcopy"
    EVAL = "eval"
    IMAP = "imap"
    INOREMAP = "inoremap"
    IUNMAP = "iunmap"
    NMAP = "nmap"
    NNOREMAP = "nnoremap"
    NORMAL = "normal"
    NUNMAP = "nunmap"
    OPEN = "open"
    QUIT = "quit"
    QUNSHIFT = "qunshift"
    QCLEAR = "qclear"
    QPOP = "qpop"
    QPUSH = "qpush"
    SAVE = "save"
    SET = "set"
    SHELLCMD = "shellcmd"
    SHORTCUT_ADD = "shortcut-add"
    SHORTCUT_DEFAULT = "shortcut-default"
    SHORTCUT_REMOVE = "shortcut-remove"
    TABOPEN = "tabopen"


class ArgFlag(Flag):
    """Argument shape of a command."""

    NONE = 0
    BANG = auto()
    LHS = auto()
    RHS = auto()
    EXPAND = auto()

    def describe(self) -> str:
        parts = [str(flag.name).lower() for flag in ArgFlag if flag in self]
        return ",".join(parts) or "none"


@dataclass(frozen=True)
class CommandDescriptor:
    """Command metadata and runtime handle."""

    name: str
    code: CommandCode
    handler: CommandHandler
    flags: ArgFlag = ArgFlag.NONE

    def allows(self, flag: ArgFlag) -> bool:
        return flag in self.flags


class CommandRegistry:
    """Immutable list of commands.

    Order is significant: names sharing leading characters are kept next to
    each other and, when a typed abbreviation matches more than one command,
    the first declared one wins.
    """

    def __init__(self, descriptors: Iterable[CommandDescriptor]) -> None:
        self._descriptors: tuple[CommandDescriptor, ...] = tuple(descriptors)
        seen_names: set[str] = set()
        seen_codes: set[CommandCode] = set()
        for descriptor in self._descriptors:
            if not descriptor.name:
                raise ValueError("Command name must not be empty")
            if descriptor.name in seen_names:
                raise ValueError(f"Duplicate command name: {descriptor.name}")
            if descriptor.code in seen_codes:
                raise ValueError(f"Duplicate command code: {descriptor.code}")
            seen_names.add(descriptor.name)
            seen_codes.add(descriptor.code)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __getitem__(self, index: int) -> CommandDescriptor:
        return self._descriptors[index]

    def get(self, code: CommandCode) -> CommandDescriptor | None:
        for descriptor in self._descriptors:
            if descriptor.code is code:
                return descriptor
        return None

    def index_of(self, name: str) -> int:
        for index, descriptor in enumerate(self._descriptors):
            if descriptor.name == name:
                return index
        raise KeyError(name)

    def names(self) -> builtins.list[str]:
        return [descriptor.name for descriptor in self._descriptors]

    def fill_completion(self, prefix: str = "") -> builtins.list[str]:
        """Names starting with prefix, in declaration order."""
        if not prefix:
            return self.names()
        return [descriptor.name for descriptor in self._descriptors if descriptor.name.startswith(prefix)]
