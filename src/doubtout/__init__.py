"""DoubtOut: campus doubt resolution backend."""

__version__ = "0.1.0"
