"""Hash checking toolkit: sum file parsing, hash codecs, settings, a command line and online lookups."""

__version__ = "0.1.0"