"""Ports — protocols implemented by storage adapters."""

from nscache.ports.outbound import StorageBackend

__all__ = ["StorageBackend"]
