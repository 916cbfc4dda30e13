"""Portal grid layout engine and layout API."""

__version__ = "0.1.0"
