"""POSIX tools: diff blocks, directory listing, parallel matrix multiplication and signals."""

__version__ = "0.1.0"