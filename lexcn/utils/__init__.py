"""
Utils puros (sem I/O): numerais chineses, query FTS5, ids de norma.
"""

__all__ = []
