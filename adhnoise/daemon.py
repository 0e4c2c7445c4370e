"""The daemon: receives commands from the GUI and plays the noise."""

from __future__ import annotations

import os
import queue
import socket
import sys
import threading
from collections.abc import Callable, Mapping

import numpy as np

from .audio_bridge import play
from .config import Weights, is_development, socket_path
from .generator import gen_weighted_noise
from .protocol import GUICommand, Protocol, Quit, SetWeights, Toggle
from .samples import BlendingSamples, BlendType, Sample

SD_LISTEN_FDS_START = 3


def systemd_socket(environ: Mapping[str, str] | None = None) -> Protocol | None:
    """The datagram socket handed over by systemd, or None if there is none."""
    if environ is None:
        environ = os.environ
    try:
        pid = int(environ["LISTEN_PID"])
        count = int(environ["LISTEN_FDS"])
    except (KeyError, ValueError):
        return None
    if pid != os.getpid() or count < 1:
        return None
    sock = socket.socket(fileno=SD_LISTEN_FDS_START)
    if sock.family != socket.AF_UNIX or sock.type != socket.SOCK_DGRAM:
        sock.detach()
        raise RuntimeError("systemd socket is not a Unix datagram socket")
    return Protocol(sock)


def get_protocol(development: bool = False, environ: Mapping[str, str] | None = None) -> Protocol:
    """The socket to receive GUI commands on.

    In development mode the daemon creates it; otherwise systemd should
    pass one, with a manually created socket as the fallback.
    """
    if development:
        return Protocol.bind(socket_path(True))
    protocol = systemd_socket(environ)
    if protocol is not None:
        return protocol
    print(
        "Warning: not in development mode but systemd did not give us a socket. "
        "Falling back on manually created socket.",
        file=sys.stderr,
    )
    return Protocol.bind(socket_path(False))


def gui_relay(protocol: Protocol, commands: queue.Queue) -> None:
    """Forward every command received on ``protocol`` into ``commands``."""
    while True:
        command = protocol.recv()
        print("Received Command.")
        commands.put(command)


class Daemon:
    """Reacts to GUI commands by generating and playing noise."""

    def __init__(
        self,
        player: Callable[[BlendingSamples], object] = play,
        noise: Callable[[Weights], Sample] = gen_weighted_noise,
    ) -> None:
        self._player = player
        self._noise = noise
        self.stream = None
        self.playing = False

    def handle(self, command: GUICommand) -> bool:
        """Carry out one command; return False when the daemon should quit."""
        if isinstance(command, Quit):
            print("Daemon quit")
            return False
        if isinstance(command, SetWeights):
            self._set_weights(command.weights)
        elif isinstance(command, Toggle):
            self._toggle()
        return True

    def _set_weights(self, weights: Weights) -> None:
        chunks = BlendingSamples([self._noise(weights), self._noise(weights)]).with_blend(BlendType.SIGMOID)
        try:
            new_stream = self._player(chunks)
        except (RuntimeError, OSError) as exc:
            print(exc, file=sys.stderr)
            return
        self._close_stream()
        self.stream = new_stream
        self.playing = True

    def _toggle(self) -> None:
        if self.stream is None:
            return
        try:
            if self.playing:
                self.stream.pause()
            else:
                self.stream.play()
        except (RuntimeError, OSError) as exc:
            print(exc, file=sys.stderr)
            return
        self.playing = not self.playing

    def _close_stream(self) -> None:
        if self.stream is not None:
            self.stream.close()
            self.stream = None

    def run(self, commands: queue.Queue) -> None:
        """Handle commands from the queue until a Quit arrives."""
        while self.handle(commands.get()):
            pass
        self._close_stream()
        self.playing = False


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    development = is_development(argv)
    protocol = get_protocol(development)
    commands: queue.Queue = queue.Queue()
    threading.Thread(target=gui_relay, args=(protocol, commands), name="gui-relay", daemon=True).start()
    try:
        Daemon().run(commands)
    finally:
        protocol.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())