"""JusticeConnect - AI legal assistant backend for Philippine law."""

__version__ = "1.0.0"
