"""Reading and writing animated Windows cursor (.ani) files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from .cur import CursorFormatError

_U32 = struct.Struct("<I")
_ANIH = struct.Struct("<9I")
_ICON_MIN_SIZE = 22


@dataclass
class AniFrame:
    """A single frame of an animated cursor; duration is in jiffies (1/60 s)."""

    width: int
    height: int
    hotspot_x: int
    hotspot_y: int
    image_data: bytes
    duration: int | None = None


@dataclass
class AniHeader:
    """The contents of the ``anih`` chunk."""

    SIZE: ClassVar[int] = 36

    num_frames: int = 0
    num_steps: int = 0
    width: int = 0
    height: int = 0
    bit_count: int = 0
    planes: int = 0
    default_rate: int = 6
    flags: int = 0

    def _pack(self) -> bytes:
        return _ANIH.pack(
            self.SIZE,
            self.num_frames,
            self.num_steps,
            self.width,
            self.height,
            self.bit_count,
            self.planes,
            self.default_rate,
            self.flags,
        )

    @classmethod
    def _unpack(cls, data: bytes) -> AniHeader:
        _size, *values = _ANIH.unpack_from(data)
        return cls(*values)


class _Reader:
    """Sequential reader over an in-memory buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.pos

    def read_exact(self, size: int) -> bytes:
        if size > self.remaining:
            raise CursorFormatError("unexpected end of data")
        chunk = self._data[self.pos:self.pos + size]
        self.pos += size
        return chunk

    def skip_padding(self) -> None:
        if self.remaining >= 1:
            self.pos += 1


def _chunk(tag: bytes, payload: bytes) -> bytes:
    return tag + _U32.pack(len(payload)) + payload


def _pack_u32s(values: list[int]) -> bytes:
    return b"".join(_U32.pack(value) for value in values)


def _unpack_u32s(data: bytes) -> list[int]:
    usable = len(data) - len(data) % 4
    return [value for (value,) in _U32.iter_unpack(data[:usable])]


def _parse_cursor_data(data: bytes) -> AniFrame:
    if len(data) < _ICON_MIN_SIZE:
        raise CursorFormatError("Invalid cursor data")
    width = data[6] or 256
    height = data[7] or 256
    hotspot_x, hotspot_y = struct.unpack_from("<HH", data, 10)
    return AniFrame(width, height, hotspot_x, hotspot_y, bytes(data))


@dataclass
class AniFile:
    """An animated cursor: frames, their play order and optional per-step rates."""

    frames: list[AniFrame]
    header: AniHeader | None = None
    sequence: list[int] | None = None
    rates: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.frames = list(self.frames)
        if self.header is None:
            header = AniHeader(num_frames=len(self.frames), num_steps=len(self.frames))
            if self.frames:
                first = self.frames[0]
                header.width = first.width
                header.height = first.height
                header.bit_count = 32
                header.planes = 1
            self.header = header
        if self.sequence is None:
            self.sequence = list(range(self.header.num_frames))
        else:
            self.sequence = list(self.sequence)
        self.rates = list(self.rates)

    def with_sequence(self, sequence: list[int]) -> AniFile:
        """Set the frame play order and the step count that goes with it."""
        self.sequence = list(sequence)
        self.header.num_steps = len(self.sequence)
        return self

    def with_rates(self, rates: list[int]) -> AniFile:
        """Set individual per-step rates in jiffies."""
        self.rates = list(rates)
        return self

    def encode(self, stream: BinaryIO) -> None:
        """Write the animation as a RIFF/ACON file to a binary stream."""
        if not self.frames:
            raise ValueError("No frames")

        body = bytearray(b"ACON")
        body += _chunk(b"anih", self.header._pack())
        if self.sequence != list(range(self.header.num_frames)):
            body += _chunk(b"seq ", _pack_u32s(self.sequence))
        if self.rates:
            body += _chunk(b"rate", _pack_u32s(self.rates))

        icons = bytearray()
        for frame in self.frames:
            icons += _chunk(b"icon", bytes(frame.image_data))
            if len(frame.image_data) % 2:
                icons += b"\x00"
        # The LIST size counts the icon chunks only, not the list type.
        body += b"LIST" + _U32.pack(len(icons)) + b"fram" + icons

        stream.write(b"RIFF" + _U32.pack(len(body)) + bytes(body))

    @classmethod
    def decode(cls, stream: BinaryIO) -> AniFile:
        """Read an animated cursor from a binary stream."""
        reader = _Reader(bytes(stream.read()))
        riff = reader.read_exact(12)
        if riff[0:4] != b"RIFF":
            raise CursorFormatError("Not a RIFF file")
        if riff[8:12] != b"ACON":
            raise CursorFormatError("Not an ANI file")

        header = AniHeader()
        sequence: list[int] = []
        rates: list[int] = []
        frames: list[AniFrame] = []

        while reader.remaining >= 8:
            chunk_header = reader.read_exact(8)
            chunk_id = chunk_header[:4]
            (chunk_size,) = _U32.unpack_from(chunk_header, 4)

            if chunk_id == b"anih":
                payload = reader.read_exact(chunk_size)
                if len(payload) >= AniHeader.SIZE:
                    header = AniHeader._unpack(payload)
            elif chunk_id == b"seq ":
                sequence.extend(_unpack_u32s(reader.read_exact(chunk_size)))
            elif chunk_id == b"rate":
                rates.extend(_unpack_u32s(reader.read_exact(chunk_size)))
            elif chunk_id == b"LIST":
                list_type = reader.read_exact(4)
                if chunk_size < 4:
                    raise CursorFormatError("LIST chunk too small")
                if list_type == b"fram":
                    end = reader.pos + chunk_size - 4
                    frames.extend(cls._read_icons(reader, end))
                else:
                    reader.pos += chunk_size - 4
            else:
                reader.pos += chunk_size

            if chunk_size % 2:
                reader.skip_padding()

        if not sequence:
            sequence = list(range(header.num_frames))

        return cls(frames=frames, header=header, sequence=sequence, rates=rates)

    @staticmethod
    def _read_icons(reader: _Reader, end: int):
        while reader.pos < end and reader.remaining >= 8:
            icon_header = reader.read_exact(8)
            if icon_header[:4] != b"icon":
                continue
            (icon_size,) = _U32.unpack_from(icon_header, 4)
            yield _parse_cursor_data(reader.read_exact(icon_size))
            if icon_size % 2:
                reader.skip_padding()

    def __str__(self) -> str:
        lines = [
            f"Animated Cursor with {len(self.frames)} frame(s):\n",
            f"  Steps: {self.header.num_steps}\n",
            f"  Size: {self.header.width}x{self.header.height}\n",
            f"  Default Rate: {self.header.default_rate} jiffies\n",
            f"  Sequence: {self.sequence}\n",
        ]
        if self.rates:
            lines.append(f"  Individual Rates: {self.rates}\n")
        for i, frame in enumerate(self.frames):
            lines.append(
                f"  Frame {i}:\n"
                f"    Size:    {frame.width}x{frame.height}\n"
                f"    Hotspot: ({frame.hotspot_x}, {frame.hotspot_y})\n"
            )
        return "".join(lines)