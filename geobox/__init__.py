"""Planar geometry types, bounding-box clipping and smart polygon clipping."""

__version__ = "0.1.0"
__all__ = ["geometry", "clip", "smartclip"]