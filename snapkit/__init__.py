"""Snapshot types, conversions and an in-process request-handling service for snapshotters."""

__version__ = "0.1.0"

__all__ = ["convert", "example", "service", "status", "types"]