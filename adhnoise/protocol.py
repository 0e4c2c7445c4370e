"""Commands from the GUI to the daemon, sent over a Unix datagram socket."""

from __future__ import annotations

import os
import socket
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .config import WEIGHTS_NUM, Weights, socket_path

GUI_COMMAND_BUF_LEN = 1024

_TAG_SET_WEIGHTS = 0
_TAG_TOGGLE = 1
_TAG_QUIT = 2
_WEIGHTS_STRUCT = struct.Struct(f"<{WEIGHTS_NUM}f")


@dataclass(frozen=True)
class SetWeights:
    """Regenerate the noise from new weights and play it."""

    weights: Weights


@dataclass(frozen=True)
class Toggle:
    """Pause or resume playback."""


@dataclass(frozen=True)
class Quit:
    """Stop the daemon."""


GUICommand = Union[SetWeights, Toggle, Quit]


class ProtocolError(Exception):
    """A command could not be encoded, sent or decoded."""


def encode_command(command: GUICommand) -> bytes:
    """Serialize a command into its wire form."""
    if isinstance(command, SetWeights):
        try:
            payload = _WEIGHTS_STRUCT.pack(*command.weights)
        except (struct.error, OverflowError) as exc:
            raise ProtocolError(f"cannot encode weights: {exc}") from exc
        return bytes([_TAG_SET_WEIGHTS]) + payload
    if isinstance(command, Toggle):
        return bytes([_TAG_TOGGLE])
    if isinstance(command, Quit):
        return bytes([_TAG_QUIT])
    raise TypeError(f"not a GUI command: {command!r}")


def decode_command(data: bytes) -> GUICommand:
    """Parse a command from its wire form; trailing bytes are ignored."""
    if not data:
        raise ProtocolError("empty message")
    tag = data[0]
    if tag == _TAG_SET_WEIGHTS:
        try:
            values = _WEIGHTS_STRUCT.unpack_from(data, 1)
        except struct.error as exc:
            raise ProtocolError(f"truncated weights: {exc}") from exc
        return SetWeights(Weights(values))
    if tag == _TAG_TOGGLE:
        return Toggle()
    if tag == _TAG_QUIT:
        return Quit()
    raise ProtocolError(f"unknown command tag {tag}")


class Protocol:
    """One end of the command socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    @classmethod
    def bind(cls, path: str | os.PathLike | None = None) -> "Protocol":
        """Listen on ``path``, replacing a stale socket file there."""
        path = Path(path) if path is not None else socket_path()
        if path.exists():
            path.unlink()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            sock.bind(str(path))
        except OSError:
            sock.close()
            raise
        return cls(sock)

    @classmethod
    def connect(cls, path: str | os.PathLike | None = None) -> "Protocol":
        """Connect to the socket the daemon listens on."""
        path = Path(path) if path is not None else socket_path()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            sock.connect(str(path))
        except OSError:
            sock.close()
            raise
        return cls(sock)

    def send(self, command: GUICommand) -> None:
        data = encode_command(command)
        if len(data) > GUI_COMMAND_BUF_LEN:
            raise ProtocolError("Gui Command too big to encode. Increase buffer size.")
        if self._sock.send(data) != len(data):
            raise ProtocolError("Socket send")

    def recv(self) -> GUICommand:
        """Block until a command arrives and return it."""
        return decode_command(self._sock.recv(GUI_COMMAND_BUF_LEN))

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> "Protocol":
        return self

    def __exit__(self, *args) -> None:
        self.close()