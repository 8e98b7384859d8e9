"""Demonstrations of file, shared-memory and threaded message hand-off, with a timing benchmark."""

__version__ = "0.1.0"
__all__ = ["benchmark", "filechannel", "memchannel", "threaded"]