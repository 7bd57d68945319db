"""scarc: Go to Scar source translator."""

__version__ = "0.1.0"
