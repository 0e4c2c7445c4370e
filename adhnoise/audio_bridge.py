"""Playback of endless stereo sample streams on the host's audio device."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Iterator

import numpy as np
import pygame

from .samples import BlendingSamples

# How long each buffer handed to the mixer lasts, in seconds.
_BUFFER_SECONDS = 0.5
# How often the feeder checks whether the mixer needs the next buffer.
_POLL_SECONDS = 0.05


class AudioError(RuntimeError):
    """The audio device could not be opened or used."""


def write_data(samples_iter: Iterator[tuple[float, float]], frames: int, channels: int) -> np.ndarray:
    """Fill ``frames`` frames of ``channels`` channels from a stereo iterator.

    Even channels get the left sample, odd channels the right one. Frames
    for which the iterator has nothing left stay silent.
    """
    if channels < 1:
        raise ValueError("at least one channel is needed")
    if frames < 0:
        raise ValueError("the number of frames cannot be negative")
    pairs = list(itertools.islice(samples_iter, frames))
    out = np.zeros((frames, channels), dtype=np.float32)
    if pairs:
        stereo = np.asarray(pairs, dtype=np.float32).reshape(len(pairs), 2)
        out[: len(pairs), 0::2] = stereo[:, 0:1]
        out[: len(pairs), 1::2] = stereo[:, 1:2]
    for _ in range(frames - len(pairs)):
        print("Received no sample")
    return out


def _to_format(frames: np.ndarray, size: int) -> np.ndarray:
    """Convert float frames into the mixer's sample format."""
    if size == 32:
        return frames.astype(np.float32)
    if size == -16:
        return np.clip(np.round(frames * 32768.0), -32768, 32767).astype(np.int16)
    if size == 16:
        return np.clip(np.round((frames + 1.0) * 32768.0), 0, 65535).astype(np.uint16)
    raise AudioError("Unsupported format")


class AudioStream:
    """A stream playing on one mixer channel; it plays until closed."""

    def __init__(self, sound, channel) -> None:
        self.sound = sound
        self.channel = channel
        self._stopped = threading.Event()
        self._feeder: threading.Thread | None = None

    def play(self) -> None:
        """Resume playback."""
        self.channel.unpause()

    def pause(self) -> None:
        """Pause playback; it can be resumed with play()."""
        self.channel.pause()

    def close(self) -> None:
        """Stop playback for good."""
        self._stopped.set()
        if self._feeder is not None and self._feeder is not threading.current_thread():
            self._feeder.join()
        self.channel.stop()

    def _feed(self, produce: Callable[[], object]) -> None:
        """Keep the channel's queue filled with buffers from ``produce``."""

        def loop() -> None:
            while not self._stopped.wait(_POLL_SECONDS):
                if self.channel.get_queue() is None:
                    self.channel.queue(produce())

        self._feeder = threading.Thread(target=loop, name="audio-feeder", daemon=True)
        self._feeder.start()


def play(samples: BlendingSamples) -> AudioStream:
    """Start playing ``samples`` on the default output device."""
    if not pygame.mixer.get_init():
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            raise AudioError(f"Failed to find a default output device: {exc}") from exc
    frequency, size, channels = pygame.mixer.get_init()
    if size not in (32, 16, -16):
        raise AudioError("Unsupported format")
    print(f"Playing with sample rate {frequency} on {channels} channels.")

    samples_iter = iter(samples)
    frames = max(int(frequency * _BUFFER_SECONDS), 1)

    def produce():
        data = _to_format(write_data(samples_iter, frames, channels), size)
        if channels == 1:
            data = np.ascontiguousarray(data[:, 0])
        return pygame.sndarray.make_sound(data)

    first = produce()
    channel = pygame.mixer.find_channel(True)
    if channel is None:
        raise AudioError("No mixer channel available")
    channel.play(first)
    stream = AudioStream(first, channel)
    stream._feed(produce)
    return stream