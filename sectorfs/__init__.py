"""A flat, sector-based file system on an in-memory disk, with its supporting data structures."""

__version__ = "0.1.0"