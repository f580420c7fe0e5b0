"""Kubernetes probe targets and synthetic CPU load over HTTP."""

__version__ = "3.0.0"
