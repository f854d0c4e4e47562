"""Ingestion layer.

This package contains the live feed client and the normalizers that turn its
raw payloads into :class:`~parkkean.models.LiveLot` records.
"""

__all__: list[str] = []
