"""A small equalizer window for weighting the frequency bands of the noise."""

from __future__ import annotations

import enum
import math
import sys
from collections.abc import Sequence

from .config import SEGMENTS_WEIGHT_MAX, WEIGHTS_NUM, Weights, is_development, socket_path
from .protocol import Protocol, Quit, SetWeights, Toggle
from .slots import Slots, config_dir

SEGMENTS_WIDTH = 10.0
CANVAS_PADDING = 20.0
WEIGHTS_PADDING_Y = 20.0
CANVAS_HEIGHT = 200.0
SCREEN_PADDING = 20

_GRADIENT_PADDING = 5.0
_THUMB_SIZE = 3.0
_CONTROL_MASK = 0x4

# Colour stops of the bars, from the lowest band to the highest.
_GRADIENT_STOPS = (
    (0.0, (0x80, 0x00, 0x00)),
    (0.1, (0xFF, 0x00, 0x00)),
    (0.3, (0xFF, 0xFF, 0x00)),
    (0.5, (0x00, 0x80, 0x00)),
    (0.7, (0x00, 0x80, 0x00)),
    (0.9, (0x00, 0xFF, 0xFF)),
    (1.0, (0x80, 0x00, 0x80)),
)


def weight_to_ypos(weight: float) -> float:
    """Vertical canvas position of the top of a bar with this weight."""
    return CANVAS_HEIGHT + WEIGHTS_PADDING_Y - weight * CANVAS_HEIGHT


def ypos_to_weight(y: float) -> float:
    """Weight for a vertical canvas position, clamped to the valid range."""
    weight = (CANVAS_HEIGHT + WEIGHTS_PADDING_Y - y) / CANVAS_HEIGHT
    return min(max(weight, 0.0), SEGMENTS_WEIGHT_MAX)


def xpos_to_segment(x: float) -> int:
    """Index of the band under a horizontal canvas position."""
    position = x / SEGMENTS_WIDTH
    if math.isnan(position) or position < 0:
        return 0
    if math.isinf(position):
        return WEIGHTS_NUM - 1
    return min(math.floor(position), WEIGHTS_NUM - 1)


def canvas_size() -> tuple[float, float]:
    """Width and height of the drawing area."""
    return WEIGHTS_NUM * SEGMENTS_WIDTH, CANVAS_HEIGHT + 2.0 * WEIGHTS_PADDING_Y


class Action(enum.Enum):
    """What a key press asks for."""

    EXIT_APPLICATION = "exit_application"
    EXIT_DAEMON = "exit_daemon"
    TOGGLE_PLAY = "toggle_play"
    CLEAR = "clear"
    SAVE_SLOT = "save_slot"
    RECALL_SLOT = "recall_slot"


_KEY_ACTIONS = {
    "Q": Action.EXIT_APPLICATION,
    "D": Action.EXIT_DAEMON,
    "P": Action.TOGGLE_PLAY,
    "C": Action.CLEAR,
}


def key_action(char: str, control: bool = False) -> tuple[Action, int | None] | None:
    """Map a typed character to an action and, for slot actions, the slot index.

    Digits recall a slot, or save into it when Control is held. Keys without
    a meaning give None.
    """
    if not char:
        return None
    c = char[0]
    if c in _KEY_ACTIONS:
        return _KEY_ACTIONS[c], None
    if "0" <= c <= "9":
        idx = int(c)
        return (Action.SAVE_SLOT if control else Action.RECALL_SLOT), idx
    return None


class EqualizerModel:
    """The weights being edited, the saved slots and the state of a drag."""

    def __init__(self, slots: Slots | None = None, weights: Weights | None = None) -> None:
        self.slots = slots if slots is not None else Slots()
        self.weights = Weights(weights) if weights is not None else self.slots.recall_slot(0)
        self.last_segment_weight: tuple[int, float] | None = None

    def process_cursor(self, x: float, y: float) -> None:
        """Set the weight of the band under the cursor.

        Bands skipped over by a fast drag since the last position get weights
        interpolated between the last and the current one.
        """
        current_segment = xpos_to_segment(x)
        current_weight = ypos_to_weight(y)
        changes = [(current_segment, current_weight)]

        if self.last_segment_weight is not None:
            last_segment, last_weight = self.last_segment_weight
            segment_diff = abs(current_segment - last_segment)
            if segment_diff >= 2:
                if current_segment < last_segment:
                    (start_segment, start_weight), (end_segment, end_weight) = (
                        (current_segment, current_weight),
                        (last_segment, last_weight),
                    )
                else:
                    (start_segment, start_weight), (end_segment, end_weight) = (
                        (last_segment, last_weight),
                        (current_segment, current_weight),
                    )
                for i, segment in enumerate(range(start_segment, end_segment + 1)):
                    t = i / segment_diff
                    changes.append((segment, start_weight * (1.0 - t) + end_weight * t))

        for segment, weight in changes:
            if 0 <= segment < WEIGHTS_NUM:
                self.weights[segment] = weight
        self.last_segment_weight = (current_segment, current_weight)

    def reset_drag(self) -> None:
        """Forget the last cursor position so no bands get interpolated."""
        self.last_segment_weight = None

    def clear(self) -> None:
        """Go back to full weight everywhere, i.e. white noise."""
        self.reset_drag()
        self.weights = Weights.default()

    def save_slot(self, idx: int) -> None:
        self.reset_drag()
        self.slots.save_slot(idx, self.weights)

    def recall_slot(self, idx: int) -> None:
        self.reset_drag()
        self.weights = self.slots.recall_slot(idx)


def _gradient_color(position: float) -> str:
    """Colour of the bar gradient at ``position`` in 0..1, as a Tk colour."""
    position = min(max(position, 0.0), 1.0)
    for (p0, c0), (p1, c1) in zip(_GRADIENT_STOPS, _GRADIENT_STOPS[1:]):
        if position <= p1:
            t = 0.0 if p1 == p0 else (position - p0) / (p1 - p0)
            r, g, b = (round(a * (1.0 - t) + b * t) for a, b in zip(c0, c1))
            return f"#{r:02x}{g:02x}{b:02x}"
    r, g, b = _GRADIENT_STOPS[-1][1]
    return f"#{r:02x}{g:02x}{b:02x}"


class EqualizerWindow:
    """The Tk window that shows the equalizer and forwards commands."""

    def __init__(self, root, model: EqualizerModel, protocol: Protocol, directory=None) -> None:
        import tkinter as tk

        self.root = root
        self.model = model
        self.protocol = protocol
        self.directory = directory
        self._active = False

        width, height = canvas_size()
        self._width, self._height = width, height
        root.title("Equalizer")
        root.resizable(False, False)
        window_w = int(width + 2.0 * CANVAS_PADDING)
        window_h = int(height + 2.0 * CANVAS_PADDING)
        pos_x = max(root.winfo_screenwidth() - SCREEN_PADDING - window_w, 0)
        pos_y = max(root.winfo_screenheight() - SCREEN_PADDING - window_h - 50, 0)
        root.geometry(f"{window_w}x{window_h}+{pos_x}+{pos_y}")

        self.canvas = tk.Canvas(
            root,
            width=int(width),
            height=int(height),
            highlightthickness=0,
            cursor="crosshair",
        )
        self.canvas.pack(padx=int(CANVAS_PADDING), pady=int(CANVAS_PADDING))

        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", self._on_leave)
        root.bind("<Key>", self._on_key)
        root.protocol("WM_DELETE_WINDOW", self.close)

        self.redraw()

    def _in_bounds(self, x: float, y: float) -> bool:
        return 0.0 <= x < self._width and 0.0 <= y < self._height

    def _confirm_weights(self) -> None:
        self.model.reset_drag()
        self.protocol.send(SetWeights(Weights(self.model.weights)))

    def _on_press(self, event) -> None:
        self._active = True
        if self._in_bounds(event.x, event.y):
            self.model.process_cursor(event.x, event.y)
            self.redraw()
        else:
            self.model.reset_drag()

    def _on_release(self, event) -> None:
        if self._active:
            self._active = False
            self._confirm_weights()

    def _on_leave(self, event) -> None:
        if self._active:
            self._active = False
            self._confirm_weights()

    def _on_motion(self, event) -> None:
        if not self._in_bounds(event.x, event.y):
            self.model.reset_drag()
        elif self._active:
            self.model.process_cursor(event.x, event.y)
            self.redraw()

    def _on_key(self, event) -> None:
        char = event.char or (event.keysym if len(event.keysym) == 1 else "")
        result = key_action(char, bool(event.state & _CONTROL_MASK))
        if result is None:
            return
        action, idx = result
        if action is Action.EXIT_APPLICATION:
            self.close()
        elif action is Action.EXIT_DAEMON:
            self.model.reset_drag()
            self.protocol.send(Quit())
            self.close()
        elif action is Action.TOGGLE_PLAY:
            self.model.reset_drag()
            self.protocol.send(Toggle())
        elif action is Action.CLEAR:
            self.model.clear()
            self.redraw()
        elif action is Action.SAVE_SLOT:
            self.model.save_slot(idx)
        elif action is Action.RECALL_SLOT:
            self.model.recall_slot(idx)
            self.redraw()

    def redraw(self) -> None:
        """Draw the bars for the current weights."""
        canvas = self.canvas
        canvas.delete("all")
        width, height = self._width, self._height
        bottom = height - WEIGHTS_PADDING_Y
        for i, weight in enumerate(self.model.weights):
            x = i * SEGMENTS_WIDTH
            y = weight_to_ypos(weight)
            color = _gradient_color((x + SEGMENTS_WIDTH / 2.0) / width)
            canvas.create_rectangle(x, y, x + SEGMENTS_WIDTH, bottom, fill=color, outline="")
            thumb_y = y - _GRADIENT_PADDING
            canvas.create_rectangle(
                x, thumb_y, x + SEGMENTS_WIDTH, thumb_y + _THUMB_SIZE, fill="black", outline=""
            )
            canvas.create_line(x, thumb_y, x, bottom, fill="black")
            canvas.create_line(x + SEGMENTS_WIDTH, thumb_y, x + SEGMENTS_WIDTH, bottom, fill="black")
        canvas.create_rectangle(1, 1, width - 1, height - 1, width=2, outline="black")

    def close(self) -> None:
        """Save the slots and close the window."""
        print("exiting")
        self.model.reset_drag()
        self.model.slots.write_to_disk(self.directory)
        self.root.destroy()


def main(argv: Sequence[str] | None = None) -> int:
    import tkinter as tk

    if argv is None:
        argv = sys.argv[1:]
    development = is_development(list(argv))
    protocol = Protocol.connect(socket_path(development))
    directory = config_dir()
    slots = Slots.load_from_disk(directory)
    model = EqualizerModel(slots, slots.recall_slot(0))
    try:
        root = tk.Tk()
        EqualizerWindow(root, model, protocol, directory)
        root.mainloop()
    finally:
        protocol.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())