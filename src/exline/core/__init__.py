"""Core interpreter: registry, resolver, parser and chain executor."""

from .commands import DEFAULT_COMMANDS, default_registry
from .executor import ChainResult, CommandOutcome, ExInterpreter
from .parser import ParsedCommand, parse_segment

__all__ = [
    "DEFAULT_COMMANDS",
    "ChainResult",
    "CommandOutcome",
    "ExInterpreter",
    "ParsedCommand",
    "default_registry",
    "parse_segment",
]
