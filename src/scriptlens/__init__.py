"""scriptlens — classify, validate, and highlight untrusted install scripts."""

__version__ = "0.3.0"
