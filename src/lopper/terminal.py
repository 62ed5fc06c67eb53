"""Raw-mode terminal input and output."""

import sys
import termios
import tty
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional, TextIO

import typer

from lopper.errors import IoError, TerminalError
from lopper.logging_config import get_logger

logger = get_logger(__name__)

# Raw mode turns off output post-processing, so lines need an explicit carriage return
LINE_END = "\n\r"


class Terminal:
    """Byte-at-a-time input and manual line endings on top of stdin/stdout."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        # Text streams carry their bytes on .buffer
        self._reader: BinaryIO = getattr(self.stdin, "buffer", self.stdin)

    def is_tty(self) -> bool:
        try:
            return self.stdin.isatty()
        except ValueError:
            return False

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Put the terminal in raw mode for the duration of the block.

        The previous settings are restored on the way out, including when the
        block raises. Input that is not a terminal is left alone.
        """
        if not self.is_tty():
            logger.debug("stdin is not a terminal, raw mode skipped")
            yield
            return

        try:
            fd = self.stdin.fileno()
            saved = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError) as err:
            raise TerminalError(f"Failed to enable raw mode: {err}") from err
        logger.debug("Raw mode enabled")

        try:
            yield
        finally:
            try:
                termios.tcsetattr(fd, termios.TCSADRAIN, saved)
            except (termios.error, OSError) as err:
                raise TerminalError(f"Failed to disable raw mode: {err}") from err
            logger.debug("Raw mode disabled")

    def read_byte(self) -> bytes:
        """Block until one byte is read. Returns b"" at end of input."""
        try:
            return self._reader.read(1)
        except (OSError, ValueError) as err:
            raise IoError(f"Failed to read input: {err}") from err

    def write(self, text: str) -> None:
        """Write text without a line ending and flush it."""
        try:
            typer.echo(text, file=self.stdout, nl=False)
        except (OSError, ValueError) as err:
            raise IoError(f"Failed to write output: {err}") from err

    def write_line(self, text: str = "") -> None:
        self.write(text + LINE_END)
