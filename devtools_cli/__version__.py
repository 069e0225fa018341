"""Version information for devtools-cli."""

__version__ = "0.3.0"
