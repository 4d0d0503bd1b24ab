"""Reading and writing uncompressed Windows BMP images as float colour channels."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, Union

from .bmpformat import MAGIC, BitmapError, Compression, FileHeader, InfoHeader, RgbQuad

Channel = list[list[float]]
Pixel = tuple[int, int, int]

_SCALE = 1.0 / 255.0
_OFFSET_BITS = 54
_PELS_PER_METER = 2952


def _shape(channel: Channel) -> tuple[int, int]:
    widths = {len(row) for row in channel}
    if len(widths) > 1:
        raise BitmapError("rows of a channel must all have the same length")
    return len(channel), widths.pop() if widths else 0


@dataclass
class Bitmap:
    """An image as red, green and blue channels.

    Each channel is a list of rows, bottom row first; values lie in [0, 1].
    """

    red: Channel
    green: Channel
    blue: Channel

    def __post_init__(self) -> None:
        self._checked_shape()

    def _checked_shape(self) -> tuple[int, int]:
        shape = _shape(self.red)
        if _shape(self.green) != shape or _shape(self.blue) != shape:
            raise BitmapError("all three channels must have the same size")
        return shape

    def width(self) -> int:
        """Number of pixels in a row."""
        return self._checked_shape()[1]

    def height(self) -> int:
        """Number of rows."""
        return self._checked_shape()[0]


def _read_exact(stream: BinaryIO, count: int, what: str) -> bytes:
    data = stream.read(count)
    if len(data) < count:
        raise BitmapError(f"unexpected end of data while reading {what}")
    return data


def _read_palette(stream: BinaryIO, count: int) -> list[RgbQuad]:
    data = _read_exact(stream, RgbQuad.SIZE * count, "colour table")
    return [RgbQuad(*entry) for entry in RgbQuad.STRUCT.iter_unpack(data)]


def _lookup(palette: list[RgbQuad], indices: list[int]) -> list[Pixel]:
    try:
        entries = [palette[index] for index in indices]
    except IndexError:
        raise BitmapError("pixel refers to a colour outside the colour table") from None
    return [(entry.red, entry.green, entry.blue) for entry in entries]


def _read_true_colour(stream: BinaryIO, width: int, height: int) -> list[list[Pixel]]:
    rest = width % 4
    rows = []
    for _ in range(height):
        data = _read_exact(stream, 3 * width, "pixel data")
        stream.read(rest)
        rows.append(
            [(r, g, b) for b, g, r in zip(data[0::3], data[1::3], data[2::3])]
        )
    return rows


def _read_indexed(
    stream: BinaryIO, width: int, height: int, palette: list[RgbQuad], bits: int
) -> list[list[Pixel]]:
    rows = []
    for _ in range(height):
        if bits == 8:
            indices = list(_read_exact(stream, width, "pixel data"))
            stream.read((3 * width) % 4)
        else:
            needed = (width + 1) // 2
            data = _read_exact(stream, needed, "pixel data")
            # Every row consumes one byte per pixel pair plus one, then fill bytes.
            stream.read(width // 2 + 1 - needed + needed % 4)
            indices = [n for byte in data for n in (byte >> 4, byte & 0x0F)][:width]
        rows.append(_lookup(palette, indices))
    return rows


def read_bitmap(stream: BinaryIO) -> Bitmap:
    """Decode a 4-, 8- or 24-bit uncompressed bitmap from a binary stream."""
    if stream.read(2) != MAGIC:
        raise BitmapError("not a bitmap file")
    FileHeader.unpack(_read_exact(stream, FileHeader.SIZE, "file header"))
    info = InfoHeader.unpack(_read_exact(stream, InfoHeader.SIZE, "info header"))

    bits, compression = info.bit_count, info.compression
    if bits not in (1, 4, 8, 24) or info.planes != 1 or compression > Compression.RLE4:
        raise BitmapError(
            f"unsupported bitmap: {bits} bits, {info.planes} planes, "
            f"compression {compression}"
        )
    if not (
        compression == Compression.RGB
        or (bits == 4 and compression == Compression.RLE4)
        or (bits == 8 and compression == Compression.RLE8)
    ):
        raise BitmapError("compression type does not match the bit depth")
    if bits == 1:
        raise BitmapError("1-bit bitmaps are not supported")
    if compression != Compression.RGB:
        raise BitmapError("compressed bitmaps are not supported")

    width, height = info.width, info.height
    if bits == 24:
        rows = _read_true_colour(stream, width, height)
    else:
        colours = info.colors_used or (1 << bits)
        palette = _read_palette(stream, colours)
        rows = _read_indexed(stream, width, height, palette, bits)

    return Bitmap(
        red=[[r * _SCALE for r, _, _ in row] for row in rows],
        green=[[g * _SCALE for _, g, _ in row] for row in rows],
        blue=[[b * _SCALE for _, _, b in row] for row in rows],
    )


def load_bmp(path: Union[str, PathLike]) -> Bitmap:
    """Read a bitmap file."""
    with open(path, "rb") as stream:
        return read_bitmap(stream)


def _to_byte(value: float) -> int:
    return min(255, max(0, int(value * 255.0 + 1e-9)))


def write_bitmap(stream: BinaryIO, bitmap: Bitmap) -> None:
    """Encode ``bitmap`` as an uncompressed 24-bit bitmap; values are clamped to [0, 1]."""
    height, width = bitmap._checked_shape()
    rest = width % 4
    row_size = 3 * width + rest
    file_header = FileHeader(
        size=2 + FileHeader.SIZE + InfoHeader.SIZE + height * row_size,
        offset_bits=_OFFSET_BITS,
    )
    info = InfoHeader(
        size=InfoHeader.SIZE,
        width=width,
        height=height,
        planes=1,
        bit_count=24,
        compression=Compression.RGB,
        size_image=row_size * height,
        x_pels_per_meter=_PELS_PER_METER,
        y_pels_per_meter=_PELS_PER_METER,
        colors_used=0,
        colors_important=0,
    )
    stream.write(MAGIC + file_header.pack() + info.pack())
    padding = bytes(rest)
    for reds, greens, blues in zip(bitmap.red, bitmap.green, bitmap.blue):
        row = bytes(
            byte
            for r, g, b in zip(reds, greens, blues)
            for byte in (_to_byte(b), _to_byte(g), _to_byte(r))
        )
        stream.write(row + padding)


def save_bmp(path: Union[str, PathLike], bitmap: Bitmap) -> None:
    """Write ``bitmap`` to a file as a 24-bit bitmap."""
    with open(path, "wb") as stream:
        write_bitmap(stream, bitmap)