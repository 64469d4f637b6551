"""Menu-driven interactive command-line interfaces with history, completion and line editing."""

__version__ = "1.0.0"