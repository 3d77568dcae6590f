"""
orbito.interfaces - User interfaces for Orbito

This package contains the text-mode interface used to play and inspect games.
"""

# Don't import anything here to avoid circular imports
__all__ = []
