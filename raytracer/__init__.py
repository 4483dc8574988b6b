"""Ray tracing building blocks: geometry, lights, primitives, OBJ meshes and scene files."""

__version__ = "0.1.0"