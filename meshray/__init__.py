"""Linear algebra, transforms, bounding volumes, ground geometry and shading settings for ray tracing meshes."""

__version__ = "0.1.0"