"""assignflow - deadline-bound task assignment lifecycle engine."""

__version__ = "0.1.0"
