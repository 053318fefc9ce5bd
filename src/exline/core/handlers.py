"""Built-in command handlers.

Every handler takes the parsed segment and the collaborator bundle and
returns the text to show, or raises an :class:`~exline.errors.ExCommandError`.
Commands sharing a handler are told apart by their code.
"""

from __future__ import annotations

from loguru import logger

from exline.core.collaborators import Collaborators, LoadTarget
from exline.core.parser import ParsedCommand
from exline.core.registry import CommandCode
from exline.errors import CollaboratorError, ExternalCommandError, MissingArgumentError


def _current_uri(env: Collaborators) -> str:
    uri = env.page.current_uri()
    if not uri:
        raise CollaboratorError("No resource loaded")
    return uri


def ex_bookmark(cmd: ParsedCommand, env: Collaborators) -> str:
    if cmd.code is CommandCode.BMR:
        env.bookmarks.remove(cmd.multi_word_arg or _current_uri(env))
        return "Bookmark removed"

    env.bookmarks.add(_current_uri(env), env.page.current_title() or "", cmd.multi_word_arg)
    return "Bookmark added"


def ex_eval(cmd: ParsedCommand, env: Collaborators) -> str:
    if not cmd.multi_word_arg:
        raise MissingArgumentError(cmd.name)
    return env.page.eval_script(cmd.multi_word_arg)


def ex_hardcopy(cmd: ParsedCommand, env: Collaborators) -> None:
    env.page.print_document()


def ex_map(cmd: ParsedCommand, env: Collaborators) -> None:
    if not cmd.single_word_arg or not cmd.multi_word_arg:
        raise MissingArgumentError(cmd.name)
    # nmap/nnoremap, cmap/cnoremap, imap/inoremap: mode letter, then "n" for noremap
    env.keymaps.insert(cmd.single_word_arg, cmd.multi_word_arg, cmd.name[0], remap=cmd.name[1] != "n")


def ex_unmap(cmd: ParsedCommand, env: Collaborators) -> None:
    if not cmd.single_word_arg:
        raise MissingArgumentError(cmd.name)

    match cmd.code:
        case CommandCode.NUNMAP:
            mode = "n"
        case CommandCode.CUNMAP:
            mode = "c"
        case _:
            mode = "i"
    env.keymaps.delete(cmd.single_word_arg, mode)


def ex_normal(cmd: ParsedCommand, env: Collaborators) -> None:
    env.keymaps.replay(cmd.single_word_arg, use_mappings=not cmd.bang)


def ex_open(cmd: ParsedCommand, env: Collaborators) -> None:
    target = LoadTarget.NEW_TAB if cmd.code is CommandCode.TABOPEN else LoadTarget.CURRENT
    env.page.load(target, cmd.multi_word_arg)


def ex_queue(cmd: ParsedCommand, env: Collaborators) -> str:
    match cmd.code:
        case CommandCode.QPUSH:
            count = env.queue.push(cmd.multi_word_arg or _current_uri(env))
            return f"Pushed to queue ({count})"
        case CommandCode.QUNSHIFT:
            count = env.queue.unshift(cmd.multi_word_arg or _current_uri(env))
            return f"Unshifted to queue ({count})"
        case CommandCode.QPOP:
            uri = env.queue.pop()
            if uri is None:
                raise CollaboratorError("Queue is empty")
            env.page.load(LoadTarget.CURRENT, uri)
            return f"Popped {uri}"
        case CommandCode.QCLEAR:
            return f"Queue cleared ({env.queue.clear()})"
        case _:
            raise CollaboratorError(f"{cmd.name} is not a queue command")


def ex_quit(cmd: ParsedCommand, env: Collaborators) -> None:
    env.app.quit()


def ex_save(cmd: ParsedCommand, env: Collaborators) -> str:
    return f"Saved {env.page.save(cmd.multi_word_arg)}"


def ex_set(cmd: ParsedCommand, env: Collaborators) -> str:
    if not cmd.multi_word_arg:
        raise MissingArgumentError(cmd.name)

    name, sep, value = cmd.multi_word_arg.partition("=")
    return env.settings.apply(name, value if sep else None)


def ex_shellcmd(cmd: ParsedCommand, env: Collaborators) -> str:
    """Run the argument in a shell and wait for it. Blocks until the process exits."""
    if not cmd.multi_word_arg:
        raise MissingArgumentError(cmd.name)

    try:
        completed = env.runner.run(cmd.multi_word_arg)
    except ValueError as exc:
        raise ExternalCommandError("Could not parse command args") from exc
    except OSError as exc:
        raise ExternalCommandError(f"Could not run command: {exc}") from exc

    logger.debug("ex.shellcmd exit={} cmd={!r}", completed.returncode, cmd.multi_word_arg)
    if completed.returncode == 0:
        return completed.stdout or ""
    raise ExternalCommandError.from_exit(completed.returncode, completed.stderr or "")


def ex_shortcut(cmd: ParsedCommand, env: Collaborators) -> None:
    match cmd.code:
        case CommandCode.SHORTCUT_ADD:
            name, sep, template = cmd.multi_word_arg.partition("=")
            if not sep:
                raise MissingArgumentError(cmd.name)
            env.shortcuts.add(name, template)
        case CommandCode.SHORTCUT_REMOVE:
            env.shortcuts.remove(cmd.multi_word_arg)
        case CommandCode.SHORTCUT_DEFAULT:
            env.shortcuts.set_default(cmd.multi_word_arg)
        case _:
            raise CollaboratorError(f"{cmd.name} is not a shortcut command")
