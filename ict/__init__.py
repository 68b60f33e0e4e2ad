"""Command line for running system test targets."""

__version__ = "0.1.0"
