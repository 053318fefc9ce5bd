"""exline - Vim-style ex command line interpreter."""

from .core.executor import ChainResult, CommandOutcome, ExInterpreter
from .core.registry import ArgFlag, CommandCode, CommandDescriptor, CommandRegistry
from .session.completion import CompletionSession
from .session.history import HistorySession

__version__ = "0.1.0"

__all__ = [
    "ArgFlag",
    "ChainResult",
    "CommandCode",
    "CommandDescriptor",
    "CommandOutcome",
    "CommandRegistry",
    "CompletionSession",
    "ExInterpreter",
    "HistorySession",
]
