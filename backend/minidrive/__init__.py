"""MiniDrive: a minimal local file-sharing server."""

__version__ = "0.1.0"
