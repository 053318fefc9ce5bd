import io

from rich.console import Console

from exline.cli.render import Renderer
from exline.cli.repl import ExRepl
from exline.core.collaborators import Collaborators
from exline.core.executor import ExInterpreter


def _repl(interpreter: ExInterpreter) -> tuple[ExRepl, io.StringIO]:
    buffer = io.StringIO()
    renderer = Renderer(Console(file=buffer, width=120))
    return ExRepl(interpreter, renderer), buffer


def test_tab_and_arrow_keys_drive_sessions(env: Collaborators, interpreter: ExInterpreter) -> None:
    repl, _ = _repl(interpreter)
    assert repl.complete(":qu", 1) == ":quit"
    assert repl.complete(":quit", 1) == ":qunshift"

    repl.submit(":open http://a")
    repl.submit(":set scripts!")
    assert repl.recall(":", older=True) == ":set scripts!"
    assert repl.recall(":set scripts!", older=True) == ":open http://a"
    assert repl.recall(":open http://a", older=False) == ":set scripts!"


def test_submit_resets_sessions(interpreter: ExInterpreter) -> None:
    repl, _ = _repl(interpreter)
    repl.complete(":", 1)
    assert repl.completion.active
    result = repl.submit(":open http://a")
    assert result.ok
    assert not repl.completion.active
    assert not repl.history.active


def test_cancel_ends_completion(interpreter: ExInterpreter) -> None:
    repl, _ = _repl(interpreter)
    repl.complete(":", 1)
    repl.cancel()
    assert not repl.completion.active


def test_key_bindings_are_registered(interpreter: ExInterpreter) -> None:
    repl, _ = _repl(interpreter)
    assert len(repl.key_bindings().bindings) == 5


def test_renderer_shows_outputs_and_errors(interpreter: ExInterpreter) -> None:
    repl, buffer = _repl(interpreter)
    renderer = Renderer(Console(file=buffer, width=120))
    renderer.chain_result(interpreter.execute("set scripts?|nosuch"))
    text = buffer.getvalue()
    assert "scripts=True" in text
    assert "Error: Unknown command: nosuch" in text


def test_cancel_leaves_interpreter_command_mode(interpreter: ExInterpreter) -> None:
    repl, _ = _repl(interpreter)
    repl.complete(":", 1)
    assert interpreter.completion.active
    repl.cancel()
    assert not interpreter.completion.active
