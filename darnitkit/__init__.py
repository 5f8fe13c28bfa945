"""Game-support utilities: boxes, collisions, file views, compression, sound mixing and pixel formats."""

__version__ = "0.2.0"