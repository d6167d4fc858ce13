"""buildwatch - live diagnostics from streaming build output."""

__version__ = "0.1.0"
