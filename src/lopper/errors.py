"""Exceptions raised by lopper.

Every error aborts the review. The CLI catches LopperError, prints the message
and exits with status 1.
"""

from typing import Union


class LopperError(Exception):
    """Base exception for all lopper errors."""


class TerminalError(LopperError):
    """Raw mode could not be enabled or restored."""


class IoError(LopperError):
    """Reading from stdin or writing to stdout failed."""


class VcsError(LopperError):
    """Repository access, branch enumeration or deletion failed."""


class EncodingError(LopperError):
    """A branch name is not valid UTF-8 text."""

    def __init__(self, name: Union[str, bytes]) -> None:
        self.name = name
        super().__init__(f"Branch name {name!r} is not valid UTF-8")


class InvalidInput(LopperError):
    """The user typed a character that is not a command."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Invalid action {char!r}")
