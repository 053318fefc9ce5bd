"""CLI main module for exline."""

from __future__ import annotations

from pathlib import Path

import typer

from exline.cli.render import create_cli_renderer
from exline.cli.repl import ExRepl
from exline.config import Settings, get_settings
from exline.core.collaborators import LoadTarget
from exline.core.executor import ExInterpreter
from exline.core.memory import MemoryApplication, memory_collaborators

INPUT_SIGILS = ":/?"

app = typer.Typer(
    name="exline",
    help="Vim-style ex command line.",
    add_completion=False,
    rich_markup_mode="rich",
)


def build_interpreter(settings: Settings) -> ExInterpreter:
    collaborators = memory_collaborators(
        shell_command=settings.shell_command,
        history_max_items=settings.history_max_items,
    )
    return ExInterpreter(collaborators, home_dir=settings.resolved_home())


def _as_input(line: str) -> str:
    if line[:1] and line[:1] in INPUT_SIGILS:
        return line
    return f":{line}"


@app.command()
def run(
    lines: list[str] = typer.Argument(..., help="Lines to run; a line without :, / or ? is an ex command"),  # noqa: B008
    home: Path | None = typer.Option(None, "--home", help="Home directory used for ~/ expansion"),  # noqa: B008
) -> None:
    """Run ex command lines and exit non-zero on the first failure."""

    settings = get_settings(home_dir=home) if home is not None else get_settings()
    interpreter = build_interpreter(settings)
    renderer = create_cli_renderer()
    for line in lines:
        result = interpreter.activate(_as_input(line))
        renderer.chain_result(result)
        if not result:
            raise typer.Exit(1)


@app.command()
def commands() -> None:
    """List registered commands in resolution order."""

    settings = get_settings()
    create_cli_renderer().commands(build_interpreter(settings).registry)


@app.command()
def repl(
    start_uri: str | None = typer.Option(None, "--open", help="Resource to load first"),
) -> None:
    """Start an interactive command line."""

    settings = get_settings(log_profile="repl")
    interpreter = build_interpreter(settings)
    renderer = create_cli_renderer()

    uri = start_uri or settings.start_uri
    if uri:
        interpreter.collaborators.page.load(LoadTarget.CURRENT, uri)

    application = interpreter.collaborators.app
    should_exit = (
        (lambda: application.quit_requested) if isinstance(application, MemoryApplication) else (lambda: False)
    )
    ExRepl(interpreter, renderer, should_exit=should_exit).run()
