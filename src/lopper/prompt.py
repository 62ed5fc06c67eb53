"""Per-branch keep/delete/quit prompt."""

from enum import Enum

from lopper.errors import InvalidInput
from lopper.git import BranchCandidate
from lopper.logging_config import get_logger
from lopper.terminal import Terminal

logger = get_logger(__name__)

HELP_KEY = "?"

HELP_LINES = (
    "Available commands:",
    "k - Keep the branch",
    "d - Delete the branch",
    "u - Restore last deleted branch",
    "q - Quit the program",
    "? - Show this help",
)


class Action(Enum):
    """What to do with the branch under review."""

    KEEP = "k"
    DELETE = "d"
    QUIT = "q"
    UNDO = "u"


def parse_action(char: str) -> Action:
    """Map a command character to its action."""
    try:
        return Action(char)
    except ValueError as err:
        raise InvalidInput(char) from err


def format_prompt(branch: BranchCandidate) -> str:
    """Build the one-line question shown for a branch."""
    return f"'{branch.name}' ({branch.short_id}) last commit at {branch.last_commit_time} (k/d/q/u/?) >"


def show_help(terminal: Terminal) -> None:
    for line in HELP_LINES:
        terminal.write_line(line)


def resolve(branch: BranchCandidate, terminal: Terminal) -> Action:
    """Ask about one branch until the user picks an action.

    An empty read or '?' asks again. Any character that is not a command
    raises InvalidInput.
    """
    while True:
        terminal.write(format_prompt(branch))
        byte = terminal.read_byte()
        if not byte:
            continue

        # Latin-1 maps every byte to exactly one character
        char = byte.decode("latin-1")
        terminal.write_line(f" {char}")

        if char == HELP_KEY:
            show_help(terminal)
            continue

        action = parse_action(char)
        logger.debug("%s: %s", branch.name, action.name)
        return action
