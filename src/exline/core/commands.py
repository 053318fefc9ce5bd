"""The built-in command table."""

from __future__ import annotations

from exline.core import handlers
from exline.core.registry import ArgFlag, CommandCode, CommandDescriptor, CommandRegistry

_RHS = ArgFlag.RHS
_MAP = ArgFlag.LHS | ArgFlag.RHS
_UNMAP = ArgFlag.LHS
_EXP = ArgFlag.RHS | ArgFlag.EXPAND

# Order matters: commands are grouped by their leading characters and the
# first declared command wins when an abbreviation matches several.
DEFAULT_COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor("bma", CommandCode.BMA, handlers.ex_bookmark, _RHS),
    CommandDescriptor("bmr", CommandCode.BMR, handlers.ex_bookmark, _RHS),
    CommandDescriptor("cmap", CommandCode.CMAP, handlers.ex_map, _MAP),
    CommandDescriptor("cnoremap", CommandCode.CNOREMAP, handlers.ex_map, _MAP),
    CommandDescriptor("cunmap", CommandCode.CUNMAP, handlers.ex_unmap, _UNMAP),
    CommandDescriptor("hardcopy", CommandCode.HARDCOPY, handlers.ex_hardcopy),
    CommandDescriptor("eval", CommandCode.EVAL, handlers.ex_eval, _RHS),
    CommandDescriptor("imap", CommandCode.IMAP, handlers.ex_map, _MAP),
    CommandDescriptor("inoremap", CommandCode.INOREMAP, handlers.ex_map, _MAP),
    CommandDescriptor("iunmap", CommandCode.IUNMAP, handlers.ex_unmap, _UNMAP),
    CommandDescriptor("nmap", CommandCode.NMAP, handlers.ex_map, _MAP),
    CommandDescriptor("nnoremap", CommandCode.NNOREMAP, handlers.ex_map, _MAP),
    CommandDescriptor("normal", CommandCode.NORMAL, handlers.ex_normal, ArgFlag.BANG | ArgFlag.LHS),
    CommandDescriptor("nunmap", CommandCode.NUNMAP, handlers.ex_unmap, _UNMAP),
    CommandDescriptor("open", CommandCode.OPEN, handlers.ex_open, _RHS),
    CommandDescriptor("quit", CommandCode.QUIT, handlers.ex_quit),
    CommandDescriptor("qunshift", CommandCode.QUNSHIFT, handlers.ex_queue, _RHS),
    CommandDescriptor("qclear", CommandCode.QCLEAR, handlers.ex_queue, _RHS),
    CommandDescriptor("qpop", CommandCode.QPOP, handlers.ex_queue),
    CommandDescriptor("qpush", CommandCode.QPUSH, handlers.ex_queue, _RHS),
    CommandDescriptor("save", CommandCode.SAVE, handlers.ex_save, _EXP),
    CommandDescriptor("set", CommandCode.SET, handlers.ex_set, _RHS),
    CommandDescriptor("shellcmd", CommandCode.SHELLCMD, handlers.ex_shellcmd, _EXP),
    CommandDescriptor("shortcut-add", CommandCode.SHORTCUT_ADD, handlers.ex_shortcut, _RHS),
    CommandDescriptor("shortcut-default", CommandCode.SHORTCUT_DEFAULT, handlers.ex_shortcut, _RHS),
    CommandDescriptor("shortcut-remove", CommandCode.SHORTCUT_REMOVE, handlers.ex_shortcut, _RHS),
    CommandDescriptor("tabopen", CommandCode.TABOPEN, handlers.ex_open, _RHS),
)


def default_registry() -> CommandRegistry:
    return CommandRegistry(DEFAULT_COMMANDS)
