from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import Callable, TextIO

from floodpaint.colour import Colour, ensure_colour

logger = logging.getLogger(__name__)

CSI = "\033["
RESET = CSI + "0m"
CLEAR = CSI + "2J"
HOME = CSI + "H"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"
ENTER_ALT_SCREEN = CSI + "?1049h"
LEAVE_ALT_SCREEN = CSI + "?1049l"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def move_to(x: int, y: int) -> str:
    # ANSI positions are 1-based, row first
    return f"{CSI}{y + 1};{x + 1}H"


def background(colour: Colour) -> str:
    r, g, b = colour
    return f"{CSI}48;2;{r};{g};{b}m"


def is_quit(data: bytes, quit_key: str) -> bool:
    """True if ``data`` holds the quit key, with or without Ctrl held."""
    key = ord(quit_key)
    return key in data or (key & 0x1F) in data


class AnsiSink:
    """Paints cells on a truecolor ANSI terminal and watches stdin for the quit key."""

    def __init__(
        self,
        out: TextIO | None = None,
        fd: int | None = None,
        quit_key: str = "q",
        size: Callable[[], tuple[int, int]] = get_terminal_size,
    ):
        self.out = out if out is not None else sys.stdout
        self.fd = fd
        self.quit_key = quit_key
        self.size = size

    def dimensions(self) -> tuple[int, int]:
        return self.size()

    def clear(self) -> None:
        self.out.write(RESET + CLEAR + HIDE_CURSOR + HOME)

    def place(self, coord: tuple[int, int], colour: Colour) -> None:
        colour = ensure_colour(colour)
        self.out.write(f"{move_to(*coord)}{background(colour)} {RESET}")

    def flush(self) -> None:
        self.out.flush()

    def poll_quit(self) -> bool:
        if self.fd is None:
            return False
        pressed = False
        # drain everything pending so stale keys don't pile up
        while select.select([self.fd], [], [], 0)[0]:
            data = os.read(self.fd, 1024)
            if not data:
                break
            if is_quit(data, self.quit_key):
                pressed = True
        return pressed


class TerminalSession:
    """Raw-mode terminal session yielding an :class:`AnsiSink`.

    The terminal is always put back on exit, whether the fill finished,
    the user quit, or an exception unwound the stack.
    """

    def __init__(self, out: TextIO | None = None, fd: int | None = None, quit_key: str = "q"):
        self.out = out if out is not None else sys.stdout
        self.fd = fd
        self.quit_key = quit_key
        self._saved = None

    def __enter__(self) -> AnsiSink:
        if self.fd is None:
            self.fd = sys.stdin.fileno()
        self._saved = termios.tcgetattr(self.fd)
        try:
            tty.setraw(self.fd)
            self.out.write(ENTER_ALT_SCREEN + RESET + CLEAR + HIDE_CURSOR + HOME)
            self.out.flush()
        except BaseException:
            self._restore()
            raise
        logger.debug("Terminal session started on fd %d", self.fd)
        return AnsiSink(self.out, self.fd, self.quit_key)

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()
        logger.debug("Terminal session closed")

    def _restore(self) -> None:
        try:
            self.out.write(RESET + SHOW_CURSOR + LEAVE_ALT_SCREEN)
            self.out.flush()
        finally:
            if self._saved is not None:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
                self._saved = None
