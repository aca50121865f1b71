"""Lox Language Server package.

This package provides:
- A pygls-based Language Server for Lox source files.
- An indexer that scans and parses a document (without evaluating it) to
  produce syntax diagnostics and the declared symbols.

Note: The LSP never runs user buffers; everything comes from the parser.
"""

__all__ = [
    "server",
    "indexer",
]
