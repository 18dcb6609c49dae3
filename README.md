# cursorkit

Read and write Windows cursor files:

- **`.cur`** (`cursorkit.cur`): static cursors holding one or more image frames, each with its own size and hotspot.
- **`.ani`** (`cursorkit.ani`): RIFF-based animated cursors with an `anih` header, an optional frame sequence (`seq `), optional per-step rates (`rate`) and a `LIST`/`fram` chunk of embedded icon frames.

A small command-line tool (`cursorkit.cli`) builds a hue-cycling animated cursor from a single image, or writes out the frames of a `.cur` file.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Static cursors

```python
from cursorkit.cur import CursorFile, CursorFrame, CursorFormatError

with open("pointer.png", "rb") as fh:
    png_bytes = fh.read()

frame = CursorFrame(32, 32, 8, 9, png_bytes)   # width, height, hotspot x, hotspot y, image data
cursor = CursorFile.single(frame)

with open("pointer.cur", "wb") as fh:
    cursor.encode(fh)

with open("pointer.cur", "rb") as fh:
    loaded = CursorFile.decode(fh)

print(loaded)   # frame count, then each frame's size and hotspot
```

- A width or height of 256 is stored as `0` in the directory entry and read back as 256.
- `CursorFile.decode` needs a seekable binary stream. It raises `CursorFormatError` (a subclass of `ValueError`) when the type field is not a cursor, when there are no frames, or when the data ends early.
- `CursorFile.encode` raises `ValueError` when the cursor has no frames.

## Animated cursors

```python
from cursorkit.ani import AniFile, AniFrame

# each frame holds a complete embedded icon/cursor file as image_data
frames = [AniFrame(32, 32, 8, 9, icon_bytes, duration=6) for icon_bytes in icons]
ani = AniFile(frames).with_sequence([0, 1, 2, 1]).with_rates([6, 6, 12, 6])

with open("busy.ani", "wb") as fh:
    ani.encode(fh)

with open("busy.ani", "rb") as fh:
    loaded = AniFile.decode(fh)

print(loaded)   # frame count, steps, size, default rate, sequence, rates, per-frame hotspots
```

- When no header is given, `AniFile` builds an `AniHeader` from the frames: frame and step counts, the first frame's size, 32 bits per pixel, one plane.
- `with_sequence` also sets the header's step count. Both `with_sequence` and `with_rates` return the same object, so calls can be chained.
- The `seq ` chunk is written only when the sequence differs from `0, 1, 2, …`. The `rate` chunk is written only when rates are given. An `AniFrame`'s `duration` is not written to the file.
- Rates and the default rate are in jiffies (1/60 s). The default rate is 6, which gives 10 frames per second.
- On decoding, each frame's size and hotspot come from the first directory entry of its embedded icon data, and `duration` is `None`. Unknown chunks are skipped.
- `AniFile.decode` raises `CursorFormatError` for data that is not RIFF/ACON, is truncated, or holds an icon shorter than 22 bytes.
- `AniFile.encode` raises `ValueError` when there are no frames.

## Command line

```
cursorkit animate [--input PATH] [--output PATH] [--steps N] [--step-degrees D]
                  [--duration N] [--hotspot X Y]
cursorkit dump [--input PATH] [--outdir DIR]
```

**`animate`** is also what runs when no command is given. It loads an image and makes `--steps` frames (default 14). Frame *i* has its hue rotated by *i* × `--step-degrees` degrees (default 15) and is stored as an ICO image. The frames are then written as an `.ani` file.

- Defaults: input `assets/cursor.png`, output `final.ani`, hotspot `8 9`, duration `100`.
- The output file must not already exist.
- Images larger than 256×256 are rejected.

**`dump`** reads a `.cur` file (default `output.cur`) and writes each frame's raw image data to `DIR/test WxH.png` (default directory `test`). It then prints the cursor's summary.

Errors are reported on standard error, and the exit status is 1.

The same steps are available from Python as `get_image`, `hue_rotate`, `encode_image`, `build_animation` and `dump_cursor` in `cursorkit.cli`.

## What it does not do

cursorkit does not decode or render the image data embedded in cursor frames. Frame data is kept and written back as opaque bytes, apart from the size and hotspot fields read from the icon directory. It also does not install cursors into any desktop environment.