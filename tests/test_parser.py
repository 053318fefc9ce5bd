import pytest

from exline.core.commands import default_registry
from exline.core.expansion import Expander
from exline.core.parser import ParsedCommand, parse_multi_word, parse_segment, parse_single_word
from exline.core.registry import ArgFlag
from exline.core.resolver import InputCursor
from exline.errors import TrailingCharactersError, UnknownCommandError

REGISTRY = default_registry()


def _expander(uri: str | None = "http://example.com") -> Expander:
    return Expander(lambda: uri, lambda: "/home/tester")


def _parse(text: str, expander: Expander | None = None) -> tuple[ParsedCommand, InputCursor]:
    cursor = InputCursor(text)
    command = ParsedCommand()
    assert parse_segment(cursor, REGISTRY, command, expander or _expander())
    return command, cursor


@pytest.mark.parametrize("count", [0, 1, 7, 42])
def test_count_name_and_multi_word_argument_for_every_rhs_command(count: int) -> None:
    for descriptor in REGISTRY:
        if not descriptor.allows(ArgFlag.RHS) or descriptor.allows(ArgFlag.LHS):
            continue
        command, _ = _parse(f":{count} {descriptor.name} arg")
        assert command.count == count
        assert command.descriptor is descriptor
        assert command.multi_word_arg == "arg"


def test_leading_sigils_and_spaces_are_skipped() -> None:
    command, _ = _parse(" :: 3set a b")
    assert command.count == 3
    assert command.name == "set"
    assert command.multi_word_arg == "a b"


def test_single_and_multi_word_arguments() -> None:
    command, _ = _parse("nmap gh :open home")
    assert command.single_word_arg == "gh"
    assert command.multi_word_arg == ":open home"


def test_escaped_space_stays_in_single_word_argument() -> None:
    command, _ = _parse("nmap a\\ b c")
    assert command.single_word_arg == "a b"
    assert command.multi_word_arg == "c"


def test_escaped_pipe_stays_in_multi_word_argument() -> None:
    command, cursor = _parse("set a\\|b")
    assert command.multi_word_arg == "a|b"
    assert cursor.at_end


def test_other_escapes_are_copied_through() -> None:
    assert parse_single_word(InputCursor("a\\xb")) == "a\\xb"
    assert parse_multi_word(InputCursor("a\\ b")) == "a\\ b"
    assert parse_multi_word(InputCursor("ab\\")) == "ab\\"
    assert parse_single_word(InputCursor("ab\\")) == "ab\\"


def test_escaped_newline_does_not_end_multi_word_argument() -> None:
    assert parse_multi_word(InputCursor("a\\\nb|c")) == "a\\\nb"


def test_segment_stops_after_pipe() -> None:
    command, cursor = _parse("set a=1|set b=2")
    assert command.multi_word_arg == "a=1"
    assert command.source == "set a=1"
    assert cursor.rest() == "set b=2"


def test_segment_stops_after_newline() -> None:
    command, cursor = _parse("set a=1\nquit")
    assert command.multi_word_arg == "a=1"
    assert cursor.rest() == "quit"


def test_command_without_arguments_stops_at_pipe() -> None:
    command, cursor = _parse("quit|open x")
    assert command.name == "quit"
    assert cursor.rest() == "open x"


def test_bang_is_parsed_for_bang_commands() -> None:
    command, _ = _parse("normal! gg")
    assert command.bang is True
    assert command.single_word_arg == "gg"

    command, _ = _parse("norm gg")
    assert command.bang is False
    assert command.single_word_arg == "gg"


def test_command_is_reset_between_segments() -> None:
    cursor = InputCursor("5normal! x |set y")
    command = ParsedCommand()
    assert parse_segment(cursor, REGISTRY, command)
    assert (command.count, command.bang, command.single_word_arg) == (5, True, "x")

    assert parse_segment(cursor, REGISTRY, command)
    assert command.count == 0
    assert command.bang is False
    assert command.single_word_arg == ""
    assert command.multi_word_arg == "y"


def test_unknown_command_raises() -> None:
    with pytest.raises(UnknownCommandError) as exc_info:
        parse_segment(InputCursor("nosuchcmd|set x=1"), REGISTRY, ParsedCommand())
    assert exc_info.value.token == "nosuchcmd|set"
    assert str(exc_info.value) == "Unknown command: nosuchcmd|set"


def test_trailing_text_after_command_without_arguments_raises() -> None:
    with pytest.raises(TrailingCharactersError):
        parse_segment(InputCursor("quit now"), REGISTRY, ParsedCommand())


def test_blank_segment_parses_nothing() -> None:
    assert parse_segment(InputCursor(": "), REGISTRY, ParsedCommand()) is False


def test_percent_expands_to_current_uri() -> None:
    command, _ = _parse("save %")
    assert command.multi_word_arg == "http://example.com"


def test_percent_without_current_uri_expands_to_nothing() -> None:
    command, _ = _parse("save %", _expander(None))
    assert command.multi_word_arg == ""


def test_home_expansion_only_for_tilde_slash() -> None:
    command, _ = _parse("shellcmd ls ~/docs ~user a~b")
    assert command.multi_word_arg == "ls /home/tester/docs ~user a~b"


@pytest.mark.parametrize(
    ("text", "expected", "rest"),
    [
        ("save ~", "~", ""),
        ("save a~", "a~", ""),
        ("save ~x", "~x", ""),
        ("save ~|quit", "~", "quit"),
        ("save ~/", "/home/tester/", ""),
    ],
)
def test_tilde_expands_only_when_followed_by_slash(text: str, expected: str, rest: str) -> None:
    command, cursor = _parse(text)
    assert command.multi_word_arg == expected
    assert cursor.rest() == rest


def test_escaped_expansion_characters_are_literal() -> None:
    command, _ = _parse("save \\%")
    assert command.multi_word_arg == "\\%"


def test_no_expansion_for_commands_without_expand_flag() -> None:
    command, _ = _parse("open %")
    assert command.multi_word_arg == "%"


def test_single_word_argument_only_ends_at_space() -> None:
    command, cursor = _parse("nunmap x|quit")
    assert command.single_word_arg == "x|quit"
    assert cursor.at_end
