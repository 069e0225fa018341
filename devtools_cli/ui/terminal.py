"""Raw-mode terminal adapter.

Owns the terminal's file descriptor and the line discipline captured at the
start of a session. Raw mode is entered with ``tty.setraw`` and left by
writing the captured ``termios`` attributes back.
"""

from __future__ import annotations

import os
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

from devtools_cli.exceptions import KeyReadError, TerminalModeError
from devtools_cli.logging import LoggerFactory
from devtools_cli.ui.keys import Key, decode_key

log = LoggerFactory.for_terminal()

HOME_AND_CLEAR = "\033[H\033[2J\r"


class Terminal:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._saved_mode: Optional[List] = None

    def fileno(self) -> int:
        return self._stdin.fileno()

    @property
    def captured(self) -> bool:
        return self._saved_mode is not None

    def capture(self) -> None:
        """Remember the current line discipline so it can be restored later."""
        try:
            self._saved_mode = termios.tcgetattr(self.fileno())
        except (termios.error, OSError, ValueError) as error:
            raise TerminalModeError("read terminal state", str(error)) from error
        log.debug("Captured terminal mode")

    def enable_raw(self) -> None:
        try:
            tty.setraw(self.fileno())
        except (termios.error, OSError, ValueError) as error:
            raise TerminalModeError("enable raw mode", str(error)) from error
        log.debug("Raw mode enabled")

    def restore(self) -> None:
        """Write the captured mode back. Best effort: the terminal may already be gone."""
        if self._saved_mode is None:
            return
        try:
            termios.tcsetattr(self.fileno(), termios.TCSADRAIN, self._saved_mode)
        except (termios.error, OSError, ValueError) as error:
            log.debug(f"Ignoring failure to restore terminal mode: {error}")
            return
        log.debug("Terminal mode restored")

    @contextmanager
    def session(self) -> Iterator[Terminal]:
        """Capture the current mode and switch to raw mode for the duration."""
        self.capture()
        try:
            self.enable_raw()
        except TerminalModeError:
            self.restore()
            raise
        try:
            yield self
        finally:
            self.restore()
            self.clear()

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Hand the terminal back in its normal mode while a blocking call runs.

        Raw mode is re-enabled on every exit path, including exceptions raised
        by the body.
        """
        self._flush()
        self.restore()
        try:
            yield
        finally:
            self.enable_raw()

    def _read_byte(self) -> bytes:
        return os.read(self.fileno(), 1)

    def _read_follow_up(self) -> Optional[bytes]:
        try:
            return self._read_byte() or None
        except OSError as error:
            log.debug(f"Escape sequence read failed: {error}")
            return None

    def read_key(self) -> Key:
        try:
            first = self._read_byte()
        except OSError as error:
            raise KeyReadError(str(error)) from error
        if not first:
            raise KeyReadError("end of input")
        key = decode_key(first, self._read_follow_up)
        log.trace(f"Key decoded: {key.name}")
        return key

    def paint(self, frame: str) -> None:
        """Clear the screen and draw ``frame`` with a single write."""
        self._stdout.write(HOME_AND_CLEAR + frame)
        self._flush()

    def clear(self) -> None:
        try:
            self._stdout.write(HOME_AND_CLEAR)
            self._flush()
        except (OSError, ValueError) as error:
            log.debug(f"Ignoring failure to clear screen: {error}")

    def _flush(self) -> None:
        self._stdout.flush()
