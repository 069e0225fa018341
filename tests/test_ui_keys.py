"""Tests for key decoding."""

import pytest

from devtools_cli.ui.keys import Key, decode_key


def reader(*chunks):
    """Return a read_next callable yielding ``chunks`` then None."""
    remaining = list(chunks)

    def read_next():
        return remaining.pop(0) if remaining else None

    return read_next


@pytest.mark.parametrize(
    "first,expected",
    [
        (b"q", Key.QUIT),
        (b"Q", Key.QUIT),
        (b"i", Key.INSTALL),
        (b"I", Key.INSTALL),
        (b"\r", Key.ENTER),
        (b"\n", Key.ENTER),
        (b"x", Key.UNKNOWN),
        (b"\x03", Key.UNKNOWN),
    ],
)
def test_single_byte_keys(first, expected):
    assert decode_key(first, reader()) is expected


@pytest.mark.parametrize(
    "final,expected",
    [(b"A", Key.UP), (b"B", Key.DOWN), (b"D", Key.LEFT), (b"C", Key.UNKNOWN)],
)
def test_csi_sequences(final, expected):
    assert decode_key(b"\x1b", reader(b"[", final)) is expected


def test_non_csi_introducer_is_unknown():
    assert decode_key(b"\x1b", reader(b"O", b"A")) is Key.UNKNOWN


@pytest.mark.parametrize("chunks", [(), (b"[",), (b"",), (b"[", b"")])
def test_truncated_escape_is_unknown(chunks):
    assert decode_key(b"\x1b", reader(*chunks)) is Key.UNKNOWN


def test_plain_bytes_never_read_further():
    def read_next():
        raise AssertionError("should not read")

    assert decode_key(b"q", read_next) is Key.QUIT
