"""Texture descriptions built from image channels, ready to hand to a renderer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

Channel = Sequence[Sequence[float]]

LINEAR_MIN = 1
LINEAR_MAG = 2
MIPMAP_LINEAR = 4

_COMPONENTS = {"RGB": 3, "RGBA": 4, "LUMINANCE_ALPHA": 2}
_GLYPH_GRID = 16


class Wrap(Enum):
    """How texture coordinates outside [0, 1] are treated."""

    REPEAT = "repeat"
    CLAMP = "clamp"


class Filter(Enum):
    """Texture sampling filters."""

    NEAREST = "nearest"
    LINEAR = "linear"
    NEAREST_MIPMAP_NEAREST = "nearest_mipmap_nearest"
    LINEAR_MIPMAP_NEAREST = "linear_mipmap_nearest"
    NEAREST_MIPMAP_LINEAR = "nearest_mipmap_linear"
    LINEAR_MIPMAP_LINEAR = "linear_mipmap_linear"


@dataclass(frozen=True)
class TextureSpec:
    """Interleaved texel data together with the parameters to upload it with."""

    width: int
    height: int
    pixel_format: str
    texels: tuple[float, ...]
    wrap: Wrap
    mag_filter: Filter
    min_filter: Filter
    mipmap: bool = False

    def __post_init__(self) -> None:
        if self.pixel_format not in _COMPONENTS:
            raise ValueError(f"unknown pixel format {self.pixel_format!r}")
        expected = self.width * self.height * self.components
        if len(self.texels) != expected:
            raise ValueError(f"expected {expected} texel values, got {len(self.texels)}")

    @property
    def components(self) -> int:
        """Number of values per texel."""
        return _COMPONENTS[self.pixel_format]


def mag_filter(mode: int) -> Filter:
    """Magnification filter chosen by the quality bits of ``mode``."""
    return Filter.LINEAR if mode & LINEAR_MAG else Filter.NEAREST


def min_filter(mode: int, mipmap: bool = False) -> Filter:
    """Minification filter chosen by the quality bits of ``mode``."""
    linear = bool(mode & LINEAR_MIN)
    if not mipmap:
        return Filter.LINEAR if linear else Filter.NEAREST
    if mode & MIPMAP_LINEAR:
        return Filter.LINEAR_MIPMAP_LINEAR if linear else Filter.NEAREST_MIPMAP_LINEAR
    return Filter.LINEAR_MIPMAP_NEAREST if linear else Filter.NEAREST_MIPMAP_NEAREST


def _shape(channel: Channel) -> tuple[int, int]:
    widths = {len(row) for row in channel}
    if len(widths) > 1:
        raise ValueError("rows of a channel must all have the same length")
    return len(channel), widths.pop() if widths else 0


def _interleave(*channels: Channel) -> tuple[int, int, tuple[float, ...]]:
    shape = _shape(channels[0])
    if any(_shape(channel) != shape for channel in channels[1:]):
        raise ValueError("all channels must have the same size")
    texels = tuple(
        float(value)
        for rows in zip(*channels)
        for pixel in zip(*rows)
        for value in pixel
    )
    height, width = shape
    return width, height, texels


def _build(
    channels: tuple[Channel, ...],
    pixel_format: str,
    wrap: Wrap,
    mode: int,
    mipmap: bool = False,
) -> TextureSpec:
    width, height, texels = _interleave(*channels)
    return TextureSpec(
        width=width,
        height=height,
        pixel_format=pixel_format,
        texels=texels,
        wrap=wrap,
        mag_filter=mag_filter(mode),
        min_filter=min_filter(mode, mipmap),
        mipmap=mipmap,
    )


def rgb_texture(red: Channel, green: Channel, blue: Channel, mode: int) -> TextureSpec:
    """A repeating RGB texture."""
    return _build((red, green, blue), "RGB", Wrap.REPEAT, mode)


def mipmap_texture(red: Channel, green: Channel, blue: Channel, mode: int) -> TextureSpec:
    """A repeating RGB texture meant to be uploaded with mipmaps."""
    return _build((red, green, blue), "RGB", Wrap.REPEAT, mode, mipmap=True)


def alpha_texture(red: Channel, green: Channel, blue: Channel, mode: int) -> TextureSpec:
    """A clamped RGBA texture whose alpha comes from the red channel.

    The red and green texel components both take the green channel.
    """
    return _build((green, green, blue, red), "RGBA", Wrap.CLAMP, mode)


def rgba_texture(
    red: Channel, green: Channel, blue: Channel, alpha: Channel, mode: int
) -> TextureSpec:
    """A repeating RGBA texture from four channels."""
    return _build((red, green, blue, alpha), "RGBA", Wrap.REPEAT, mode)


def glyph_texture(
    image: Channel, column: int, row: int, cell_size: int, luminance: float, mode: int
) -> TextureSpec:
    """A luminance-alpha texture of one cell of a 16 x 16 glyph sheet.

    ``row`` counts from the top of the sheet; the image rows run bottom first.
    The cell's pixel values become the alpha, ``luminance`` the brightness.
    """
    if not (0 <= column < _GLYPH_GRID and 0 <= row < _GLYPH_GRID):
        raise ValueError(f"glyph cell ({column}, {row}) is outside the sheet")
    if cell_size <= 0:
        raise ValueError("cell size must be positive")
    first_line = (_GLYPH_GRID - 1 - row) * cell_size
    lines = image[first_line:first_line + cell_size]
    cells = [line[column * cell_size:(column + 1) * cell_size] for line in lines]
    if len(cells) != cell_size or any(len(cell) != cell_size for cell in cells):
        raise ValueError("image is too small for the requested glyph cell")
    texels = tuple(
        component
        for cell in cells
        for value in cell
        for component in (float(luminance), float(value))
    )
    return TextureSpec(
        width=cell_size,
        height=cell_size,
        pixel_format="LUMINANCE_ALPHA",
        texels=texels,
        wrap=Wrap.CLAMP,
        mag_filter=mag_filter(mode),
        min_filter=min_filter(mode),
    )