"""Binary layout of the Windows BMP headers used by the bitmap reader and writer."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

MAGIC = b"BM"


class BitmapError(ValueError):
    """Raised when bitmap data is malformed or cannot be encoded."""


class Compression(IntEnum):
    """Values of the ``compression`` field of the info header."""

    RGB = 0
    RLE8 = 1
    RLE4 = 2
    BITFIELDS = 3


def _unpack(fmt: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < fmt.size:
        raise BitmapError(
            f"{what} needs {fmt.size} bytes, got {len(data)}"
        )
    return fmt.unpack_from(data)


def _pack(fmt: struct.Struct, values: tuple, what: str) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise BitmapError(f"cannot encode {what}: {exc}") from exc


@dataclass(frozen=True)
class RgbQuad:
    """One palette entry, stored on disk as blue, green, red, reserved."""

    blue: int
    green: int
    red: int
    reserved: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<BBBB")
    SIZE: ClassVar[int] = 4

    @classmethod
    def unpack(cls, data: bytes) -> "RgbQuad":
        """Decode a palette entry from the first four bytes of ``data``."""
        return cls(*_unpack(cls.STRUCT, data, "palette entry"))


@dataclass(frozen=True)
class FileHeader:
    """The file header that follows the ``BM`` magic key."""

    size: int
    reserved1: int = 0
    reserved2: int = 0
    offset_bits: int = 54

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IHHI")
    SIZE: ClassVar[int] = 12

    def pack(self) -> bytes:
        """Encode the header as little-endian bytes (without the magic key)."""
        return _pack(
            self.STRUCT,
            (self.size, self.reserved1, self.reserved2, self.offset_bits),
            "file header",
        )

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        """Decode the header from the first twelve bytes of ``data``."""
        return cls(*_unpack(cls.STRUCT, data, "file header"))


@dataclass(frozen=True)
class InfoHeader:
    """The bitmap info header describing dimensions and colour format."""

    size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: int
    size_image: int
    x_pels_per_meter: int
    y_pels_per_meter: int
    colors_used: int
    colors_important: int

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIIHHIIIIII")
    SIZE: ClassVar[int] = 40

    def pack(self) -> bytes:
        """Encode the header as little-endian bytes."""
        return _pack(
            self.STRUCT,
            (
                self.size,
                self.width,
                self.height,
                self.planes,
                self.bit_count,
                self.compression,
                self.size_image,
                self.x_pels_per_meter,
                self.y_pels_per_meter,
                self.colors_used,
                self.colors_important,
            ),
            "info header",
        )

    @classmethod
    def unpack(cls, data: bytes) -> "InfoHeader":
        """Decode the header from the first forty bytes of ``data``."""
        return cls(*_unpack(cls.STRUCT, data, "info header"))