"""Send text between processes one bit at a time using user signals."""

__version__ = "1.0.0"

__all__ = [
    "chars",
    "client",
    "linereader",
    "printf",
    "protocol",
    "server",
    "textutils",
]