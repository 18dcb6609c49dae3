"""Reading and writing static Windows cursor (.cur) files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO

_HEADER = struct.Struct("<HHH")
_ENTRY = struct.Struct("<BBBBHHII")
_CURSOR_TYPE = 2


class CursorFormatError(ValueError):
    """Raised when cursor data is malformed or truncated."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise CursorFormatError("unexpected end of data")
    return bytes(data)


def _dimension_byte(value: int) -> int:
    return 0 if value == 256 else value & 0xFF


def _dimension(byte: int) -> int:
    return 256 if byte == 0 else byte


@dataclass
class CursorFrame:
    """One image of a cursor together with its hotspot."""

    width: int
    height: int
    hotspot_x: int
    hotspot_y: int
    image_data: bytes


@dataclass
class CursorFile:
    """A cursor file holding one or more frames."""

    frames: list[CursorFrame] = field(default_factory=list)

    @classmethod
    def single(cls, frame: CursorFrame) -> CursorFile:
        """Build a cursor holding a single frame."""
        return cls([frame])

    def encode(self, stream: BinaryIO) -> None:
        """Write the cursor to a binary stream."""
        if not self.frames:
            raise ValueError("No frames")

        parts = [_HEADER.pack(0, _CURSOR_TYPE, len(self.frames))]
        offset = _HEADER.size + _ENTRY.size * len(self.frames)
        for frame in self.frames:
            size = len(frame.image_data)
            parts.append(
                _ENTRY.pack(
                    _dimension_byte(frame.width),
                    _dimension_byte(frame.height),
                    0,
                    0,
                    frame.hotspot_x,
                    frame.hotspot_y,
                    size,
                    offset,
                )
            )
            offset += size
        parts.extend(bytes(frame.image_data) for frame in self.frames)
        stream.write(b"".join(parts))

    @classmethod
    def decode(cls, stream: BinaryIO) -> CursorFile:
        """Read a cursor from a seekable binary stream."""
        _reserved, kind, count = _HEADER.unpack(_read_exact(stream, _HEADER.size))
        if kind != _CURSOR_TYPE:
            raise CursorFormatError("Not a cursor file")
        if count == 0:
            raise CursorFormatError("No frames")

        entries = [
            _ENTRY.unpack(_read_exact(stream, _ENTRY.size)) for _ in range(count)
        ]

        frames = []
        for width, height, _colors, _res, hotspot_x, hotspot_y, size, offset in entries:
            stream.seek(offset)
            frames.append(
                CursorFrame(
                    width=_dimension(width),
                    height=_dimension(height),
                    hotspot_x=hotspot_x,
                    hotspot_y=hotspot_y,
                    image_data=_read_exact(stream, size),
                )
            )
        return cls(frames)

    def __str__(self) -> str:
        lines = [f"Cursor with {len(self.frames)} frame(s):\n"]
        for i, frame in enumerate(self.frames):
            lines.append(
                f"  Frame {i}:\n"
                f"    Size:    {frame.width}x{frame.height}\n"
                f"    Hotspot: ({frame.hotspot_x}, {frame.hotspot_y})\n"
            )
        return "".join(lines)