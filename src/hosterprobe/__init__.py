"""Batch liveness verification for links on third-party file hosters."""

__version__ = "0.1.0"
