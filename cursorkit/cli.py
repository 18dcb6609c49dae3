"""Command line tools: build a hue-cycling animated cursor, or dump a cursor's frames."""

from __future__ import annotations

import argparse
import io
import math
import sys
from pathlib import Path
from typing import Sequence

from PIL import Image

from .ani import AniFile, AniFrame
from .cur import CursorFile, CursorFormatError

DEFAULT_STEPS = 14
DEFAULT_STEP_DEGREES = 15
DEFAULT_DURATION = 100
DEFAULT_HOTSPOT = (8, 9)
MAX_ICON_SIZE = 256


def get_image(path: str | Path) -> Image.Image:
    """Load an image file fully into memory."""
    with Image.open(path) as image:
        image.load()
        return image.copy()


def encode_image(image: Image.Image) -> bytes:
    """Encode an image as a single-entry ICO file."""
    width, height = image.size
    if width > MAX_ICON_SIZE or height > MAX_ICON_SIZE:
        raise ValueError(
            f"image of {width}x{height} is larger than {MAX_ICON_SIZE}x{MAX_ICON_SIZE}"
        )
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    buffer = io.BytesIO()
    image.save(buffer, format="ICO", sizes=[image.size])
    return buffer.getvalue()


def _hue_matrix(degrees: float) -> tuple[float, ...]:
    cosv = math.cos(math.radians(degrees))
    sinv = math.sin(math.radians(degrees))
    return (
        0.213 + cosv * 0.787 - sinv * 0.213,
        0.715 - cosv * 0.715 - sinv * 0.715,
        0.072 - cosv * 0.072 + sinv * 0.928,
        0.0,
        0.213 - cosv * 0.213 + sinv * 0.143,
        0.715 + cosv * 0.285 + sinv * 0.140,
        0.072 - cosv * 0.072 - sinv * 0.283,
        0.0,
        0.213 - cosv * 0.213 - sinv * 0.787,
        0.715 - cosv * 0.715 + sinv * 0.715,
        0.072 + cosv * 0.928 + sinv * 0.072,
        0.0,
    )


def hue_rotate(image: Image.Image, degrees: float) -> Image.Image:
    """Rotate the hue of every pixel by the given angle, keeping alpha."""
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    matrix = _hue_matrix(degrees)
    if image.mode == "RGB":
        return image.convert("RGB", matrix)
    alpha = image.getchannel("A")
    rotated = image.convert("RGB").convert("RGB", matrix)
    rotated.putalpha(alpha)
    return rotated


def build_animation(
    image: Image.Image,
    steps: int = DEFAULT_STEPS,
    step_degrees: float = DEFAULT_STEP_DEGREES,
    hotspot: tuple[int, int] = DEFAULT_HOTSPOT,
    duration: int | None = DEFAULT_DURATION,
) -> AniFile:
    """Build an animated cursor whose frames cycle through hue rotations of an image."""
    hotspot_x, hotspot_y = hotspot
    frames = []
    for step in range(steps):
        rotated = hue_rotate(image, step * step_degrees)
        width, height = rotated.size
        frames.append(
            AniFrame(width, height, hotspot_x, hotspot_y, encode_image(rotated), duration)
        )
    return AniFile(frames)


def dump_cursor(path: str | Path, outdir: str | Path) -> CursorFile:
    """Write each frame of a cursor file to its own image file and return the cursor."""
    with open(path, "rb") as stream:
        cursor = CursorFile.decode(stream)
    target = Path(outdir)
    target.mkdir(parents=True, exist_ok=True)
    for frame in cursor.frames:
        (target / f"test {frame.width}x{frame.height}.png").write_bytes(frame.image_data)
    return cursor


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cursorkit", description=__doc__)
    commands = parser.add_subparsers(dest="command")

    animate = commands.add_parser("animate", help="build a hue-cycling .ani cursor")
    animate.add_argument("--input", default="assets/cursor.png")
    animate.add_argument("--output", default="final.ani")
    animate.add_argument("--steps", type=int, default=DEFAULT_STEPS)
    animate.add_argument("--step-degrees", type=float, default=DEFAULT_STEP_DEGREES)
    animate.add_argument("--duration", type=int, default=DEFAULT_DURATION)
    animate.add_argument(
        "--hotspot", type=int, nargs=2, default=list(DEFAULT_HOTSPOT), metavar=("X", "Y")
    )

    dump = commands.add_parser("dump", help="extract the frames of a .cur file")
    dump.add_argument("--input", default="output.cur")
    dump.add_argument("--outdir", default="test")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return an exit status."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["animate"])

    try:
        if args.command == "animate":
            image = get_image(args.input)
            animation = build_animation(
                image,
                steps=args.steps,
                step_degrees=args.step_degrees,
                hotspot=tuple(args.hotspot),
                duration=args.duration,
            )
            with open(args.output, "xb") as stream:
                animation.encode(stream)
        else:
            cursor = dump_cursor(args.input, args.outdir)
            print(cursor, end="")
    except (OSError, ValueError, CursorFormatError) as error:
        print(f"cursorkit: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())