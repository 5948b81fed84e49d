"""Rendering building blocks: sampling math, pixel buffers, PNG I/O, rays, lights, debug primitives and logging."""

__version__ = "0.1.0"