"""
Data access layer.

This package contains modules for loading recorded tracks.
"""

from .loader import TrackDataLoader, TrackLoaderProtocol

__all__ = [
    "TrackDataLoader",
    "TrackLoaderProtocol",
]
