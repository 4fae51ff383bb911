"""Ocean simulation where fish feed, hunt and hold shares of a common pool."""

__version__ = "0.1.0"