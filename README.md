# adhnoise

Colored noise for concentration. You shape the noise yourself. A small
equalizer window lets you draw a weight for each of 32 frequency bands,
spaced logarithmically from 20 Hz to 20 kHz. A background daemon turns
those weights into noise and plays it without a break.

## Installation

```
pip install adhnoise
```

Audio playback uses pygame's mixer. The equalizer window uses Tk
(`tkinter`), which ships with most Python installations.

## Usage

Start the daemon first. It waits for commands on a Unix datagram socket:

```
adh-daemon
```

Then open the equalizer:

```
adh-gui
```

Both commands accept a single optional argument, `--dev`. Any other
argument is rejected with a `ValueError`.

- With `--dev`, the socket is `/tmp/adh-rs.sock`. The daemon creates it and
  replaces any stale file of that name.
- Without it, the socket is `adh-rs.sock` in `$XDG_RUNTIME_DIR`, which must
  be set.

If the daemon is started through systemd socket activation (`LISTEN_PID`
and `LISTEN_FDS`), it uses the Unix datagram socket that systemd passes in.
Otherwise it prints a warning and creates the socket itself.

### What the daemon does

- **Weights arrive:** it generates two three-second noise chunks from them.
  It cross-fades between the chunks with a sigmoid curve and plays the
  result endlessly. Any stream that was already playing is stopped.
- **Toggle:** it pauses or resumes the current stream.
- **Quit:** it stops playback and exits.

### In the equalizer window

Hold the left mouse button and drag across the bars to set the band
weights. If you move the mouse quickly, the bands you skip over are filled
in by interpolation. When you release the button, or the cursor leaves the
canvas, the new weights go to the daemon.

| Key            | Action                                       |
|----------------|----------------------------------------------|
| `Q`            | close the window                             |
| `D`            | stop the daemon and close the window         |
| `P`            | pause or resume playback                     |
| `C`            | reset all bands to full weight (white noise) |
| `0`–`9`        | recall the weights stored in that slot       |
| `Ctrl`+`0`–`9` | store the current weights in that slot       |

The letter keys are the upper-case characters, so press them with Shift
held or with Caps Lock on.

The ten slots are written as JSON to `slots.txt` when the window closes.
The file lives in `$XDG_CONFIG_HOME/adh-rs`, or in `~/.config/adh-rs` when
that variable is unset. The slots are read again on the next start, and
slot 0 supplies the starting weights. If the file is missing or unreadable,
a message is printed and every slot starts at full weight.

## Using it as a library

```python
import numpy as np

from adhnoise.config import Weights, socket_path
from adhnoise.generator import gen_weighted_noise
from adhnoise.protocol import Protocol, SetWeights, Toggle

weights = Weights.default()
chunk = gen_weighted_noise(weights, np.random.default_rng())

with Protocol.connect(socket_path(False)) as proto:
    proto.send(SetWeights(weights))
    proto.send(Toggle())
```

The modules:

- **`adhnoise.config`:** `Weights` (32 band weights), `is_development` and
  `socket_path`.
- **`adhnoise.generator`:** `gen_weighted_noise` builds a chunk of noise
  from the weights. It uses `get_freq_weight`, `freq_domain_bin`, `idct`
  and `gen_white_freqs`.
- **`adhnoise.samples`:**
  - `Sample` holds one chunk of three seconds of mono audio at 44.1 kHz.
  - `BlendingSamples` turns chunks into an endless iterator of stereo
    `(left, right)` pairs. With `with_mirror()` (the default), it plays
    the first chunk forwards and then backwards. With
    `with_blend(BlendType.LINEAR)` or `with_blend(BlendType.SIGMOID)`, it
    cycles through all chunks and fades the last 1000 samples of each into
    the next.
- **`adhnoise.protocol`:**
  - The commands `SetWeights`, `Toggle` and `Quit`.
  - `encode_command` and `decode_command` for the wire format.
  - `Protocol`, a datagram socket end with `bind`, `connect`, `send` and
    `recv`. `Protocol` is also a context manager.
  - Encoding and decoding errors raise `ProtocolError`.
- **`adhnoise.slots`:** `Slots`, with `save_slot`, `recall_slot`,
  `to_json`, `from_json`, `write_to_disk` and `load_from_disk`, plus
  `config_dir`.
- **`adhnoise.audio_bridge`:** `play` starts a `BlendingSamples` stream on
  pygame's mixer. It returns an `AudioStream` with `play`, `pause` and
  `close`. `write_data` lays stereo pairs out over any number of channels.
- **`adhnoise.daemon`:** `Daemon` reacts to commands taken from a queue.
  `gui_relay` feeds the queue from a `Protocol`.
- **`adhnoise.gui`:**
  - `EqualizerModel` holds the editing logic without any window, together
    with the coordinate helpers and `key_action`.
  - `EqualizerWindow` is the Tk front end.

## What it does not do

There is no system tray icon. The daemon never opens the equalizer window
on its own, so run `adh-gui` yourself whenever you want to change the
noise.