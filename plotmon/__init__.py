"""Terminal plot monitor for metrics logged to JSONL files."""

__version__ = "0.1.0"

__all__ = ["__version__"]