"""LINGQIAN - fortune sign drawing and shareable card composer."""

__version__ = "0.1.0"
