"""
Core Module

This module contains the in-memory caches and the error taxonomy.
"""

from .existence_cache import ExistenceCache
from .gallery_cache import GalleryCache, GalleryView
from .errors import (
    ImageHostError,
    StagingError,
    ConversionError,
    DecodeError,
    AuthError,
    MethodError,
    NotFoundError,
    CacheConsistencyError,
)

__all__ = [
    'ExistenceCache',
    'GalleryCache',
    'GalleryView',
    'ImageHostError',
    'StagingError',
    'ConversionError',
    'DecodeError',
    'AuthError',
    'MethodError',
    'NotFoundError',
    'CacheConsistencyError',
]
