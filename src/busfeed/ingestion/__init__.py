"""Ingestion layer.

This package contains adapters that turn raw provider payloads into
normalized vehicle records.
"""

__all__: list[str] = []
