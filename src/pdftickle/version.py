"""Distribution version shared by the package and the default producer string."""

__version__ = "1.0.0a1"
