"""Decoding of raw terminal bytes into key events."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

ESC = b"\x1b"

KEY_QUIT_BYTES = (b"q", b"Q")
KEY_INSTALL_BYTES = (b"i", b"I")
KEY_ENTER_BYTES = (b"\r", b"\n")


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    ENTER = "enter"
    INSTALL = "install"
    QUIT = "quit"
    UNKNOWN = "unknown"


# CSI final byte -> key, for sequences of the form ESC [ <final>
CSI_KEYS = {
    b"A": Key.UP,
    b"B": Key.DOWN,
    b"D": Key.LEFT,
}


def decode_key(first: bytes, read_next: Callable[[], Optional[bytes]]) -> Key:
    """Decode one key event.

    ``first`` is the byte that has already been read. ``read_next`` returns the
    next byte, or None when the read failed or the stream ended; in that case
    the partial sequence decodes to ``Key.UNKNOWN``.
    """
    if first in KEY_QUIT_BYTES:
        return Key.QUIT
    if first in KEY_INSTALL_BYTES:
        return Key.INSTALL
    if first in KEY_ENTER_BYTES:
        return Key.ENTER
    if first != ESC:
        return Key.UNKNOWN

    introducer = read_next()
    if not introducer:
        return Key.UNKNOWN
    final = read_next()
    if not final:
        return Key.UNKNOWN
    if introducer != b"[":
        return Key.UNKNOWN
    return CSI_KEYS.get(final, Key.UNKNOWN)
