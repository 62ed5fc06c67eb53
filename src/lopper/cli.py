"""Command line interface for lopper."""

import os

import typer
from rich.console import Console
from rich.markup import escape

from lopper.errors import LopperError
from lopper.git import GitRepo
from lopper.logging_config import get_logger, setup_logging
from lopper.prompt import Action, resolve
from lopper.terminal import Terminal

app = typer.Typer(help="Interactively prune stale local git branches", add_completion=False)
err_console = Console(stderr=True)
logger = get_logger(__name__)

DEBUG_ENV = "LOPPER_DEBUG"


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV, "").strip().lower() not in ("", "0", "false", "no")


def review_branches(repo: GitRepo, terminal: Terminal) -> None:
    """Ask about each branch in turn and delete the ones the user picks."""
    branches = repo.list_branches()
    if not branches:
        terminal.write_line("There are no branches other than 'master'")
        return

    for branch in branches:
        if branch.is_current:
            terminal.write_line("Current branch is ignored.")
            continue

        action = resolve(branch, terminal)
        while action == Action.UNDO:
            # TODO: keep a history of deleted names and tips so 'u' can recreate the last one
            terminal.write_line("Restoring deleted branches is not implemented yet.")
            action = resolve(branch, terminal)

        if action == Action.QUIT:
            logger.debug("Quit requested at %s", branch.name)
            return
        if action == Action.DELETE:
            repo.delete_branch(branch)
            terminal.write_line(
                f"'{branch.name}' has been deleted, to restore run `git branch {branch.name} {branch.identity}`"
            )


@app.command()
def main() -> None:
    """Review local branches one by one, oldest first: k keep, d delete, q quit, ? help."""
    setup_logging(debug=debug_enabled())

    terminal = Terminal()
    try:
        with terminal.raw_mode():
            review_branches(GitRepo(), terminal)
    except LopperError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}", soft_wrap=True)
        raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
