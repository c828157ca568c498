"""Scan documented Makefiles and build an ordered help model of their targets."""

__version__ = "0.1.0"

__all__ = ["builder", "directives", "model", "ordering", "scanner", "summary", "validator"]