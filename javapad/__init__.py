"""javapad: run Java snippets against remote execution providers."""

__version__ = "0.1.0"
