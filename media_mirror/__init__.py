"""Mirror remotely hosted media assets into a local cache."""

__version__ = "0.1.0"
