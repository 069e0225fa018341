"""Developer tools launcher with a keyboard-driven terminal menu."""

from devtools_cli.__version__ import __version__

__all__ = ["__version__"]
