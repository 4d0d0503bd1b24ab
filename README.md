# billard

Building blocks for a pool billiards game, with no dependencies outside the
standard library.

## What is inside

- `billard.bmpformat`: the BMP file and info headers (`FileHeader`,
  `InfoHeader`, `RgbQuad`, `Compression`) with `pack` / `unpack`, and the
  `BitmapError` raised for data that cannot be decoded or encoded.
- `billard.bitmap`: reads uncompressed 4, 8 and 24 bit BMP images into a
  `Bitmap` of red, green and blue channels (rows bottom first, values in
  `[0, 1]`), and writes 24 bit images back. Use `load_bmp` / `save_bmp` with
  paths, or `read_bitmap` / `write_bitmap` with binary streams. 1-bit and
  run-length compressed images raise `BitmapError`.
- `billard.textures`: turns image channels into interleaved texel data
  together with wrap and filter settings (`TextureSpec`, `Wrap`, `Filter`).
  It covers RGB (`rgb_texture`), mipmapped (`mipmap_texture`), alpha
  (`alpha_texture`) and RGBA (`rgba_texture`) textures, and single glyph
  cells cut from a 16 × 16 font sheet (`glyph_texture`). The filters follow
  the quality bits of the `mode` argument (`mag_filter`, `min_filter`).
- `billard.spheres`: ball geometry. `build_sphere_mesh` subdivides an
  icosahedron into a `SphereMesh` of vertices, texture coordinates and
  triangle indices. `SphereTables` builds and caches meshes for the odd
  resolutions up to a limit (clamped to 1–29).
- `billard.rack`: table set-up for the game types in `GameType` (8-ball,
  9-ball, two balls, a random spread, an empty table). `rack` returns a
  `Layout` of ball positions in centimetres and the balls in play.
  `set_up_table` racks only when the given `GameState` allows it and returns
  `None` otherwise.
- `billard.textfield`: an animated on-screen `TextField` with alignment,
  fading, keyboard entry, mouse hits and justified line layout (returned as
  `GlyphRun` lines), using the proportional glyph widths of the game font.
  `TextId` lists the identifiers of the game's translatable strings.

## Example

```python
import random
import tempfile
from pathlib import Path

from billard.bitmap import Bitmap, load_bmp, save_bmp
from billard.rack import GameType, rack
from billard.spheres import build_sphere_mesh
from billard.textfield import Alignment, TextField

layout = rack(GameType.EIGHT_BALL, 0.02, random.Random(1))
print(sorted(layout.positions))

mesh = build_sphere_mesh(3)
print(len(mesh.vertices), len(mesh.indices) // 3)

field = TextField()
field.set_text("Player 1")
field.position(8.0, 6.0, 0.5, Alignment.CENTRE)
while not field.animate(10):
    pass

image = Bitmap(red=[[1.0, 0.0]], green=[[0.0, 1.0]], blue=[[0.0, 0.0]])
with tempfile.TemporaryDirectory() as folder:
    path = Path(folder) / "tiny.bmp"
    save_bmp(path, image)
    loaded = load_bmp(path)
print(loaded.width(), loaded.height())
```

## What it does not do

The package draws nothing and opens no window: textures, meshes and text
layouts are plain data for a renderer to use. It has no ball physics, no
referee or game rules, no menus, no networking and no command to start a
game.

## Tests

```
pip install -e ".[test]"
pytest
```