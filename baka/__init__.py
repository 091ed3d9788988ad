"""Terminal viewer for the weekly anime broadcast schedule."""

__version__ = "0.1.0"
