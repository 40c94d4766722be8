"""Lisper Language Server package.

This package provides:
- A pygls-based Language Server for the Lisper dialect.
- A lightweight indexer that scans documents for top-level definitions and
  reader diagnostics without evaluation.
"""

__all__ = [
    "server",
    "indexer",
]
