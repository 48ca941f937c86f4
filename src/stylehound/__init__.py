"""Style checks for the lines a change actually touches."""

__version__ = "0.1.0"
