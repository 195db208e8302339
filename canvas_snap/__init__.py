"""Canvas Snap - alignment and spacing guides for canvas editors."""

__version__ = "0.1.0"
