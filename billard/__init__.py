"""Building blocks for a pool billiards game: bitmaps, textures, ball meshes, racks and text fields."""

__version__ = "0.1.0"
__all__ = ["bitmap", "bmpformat", "rack", "spheres", "textfield", "textures"]