"""rwc: print byte, character, word and line counts of files."""

__version__ = "0.3.0"

__all__ = ["__version__"]
