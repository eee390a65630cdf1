"""View, edit and lock a game client's JSON settings file."""

__version__ = "0.1.0"
