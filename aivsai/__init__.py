"""AI vs AI: one model answers, another reviews."""

__version__ = "0.2.0"
