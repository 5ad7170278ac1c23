"""State/store layer.

This package is the single owner of block height, subscriptions and the
per-address transaction log. Ingestion and queries share one
:class:`~ethparser.state.store.StateStore` instance and never touch its
contents directly.
"""

from ethparser.state.store import StateStore

__all__ = ["StateStore"]
