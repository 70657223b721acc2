"""
Services package for imagehost.

This module provides the upload-side business logic:
- Content-addressed image storage
- The upload ingestion pipeline
- The upload access gate

Service modules should be imported directly where needed, e.g.
`from services.content_store import ContentStore`.
"""

__all__ = [
    'access_gate',
    'content_store',
    'ingestion_service',
]
