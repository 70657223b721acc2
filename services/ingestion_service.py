"""
Upload ingestion pipeline.

Flow for one upload:
  1. Stage the raw bytes to a unique file in the staging directory
  2. Normalize, hash and store via the content store
  3. Record the hash in the existence cache (idempotent)
  4. Rebuild the gallery cache from the store, even for duplicates
  5. Hand the hash back to the caller

Steps 1-2 fail the request without touching either cache. Steps 3-4 run
on data that is already durable, so a failure there is an invariant
violation: it is logged as critical and raised as CacheConsistencyError.
"""

import os
from dataclasses import dataclass
from typing import BinaryIO

from core.errors import (
    CacheConsistencyError,
    ConversionError,
    DecodeError,
    StagingError,
)
from core.existence_cache import ExistenceCache
from core.gallery_cache import GalleryCache
from services.content_store import ContentStore
from utils.file_utils import staging_name
from utils.logging_config import get_logger

logger = get_logger('Ingest')

CHUNK_SIZE = 64 * 1024

# Exclusive-create attempts before giving up on a staging name
MAX_STAGING_ATTEMPTS = 100


@dataclass(frozen=True)
class StagedUpload:
    """Raw upload bytes written to the staging directory."""
    path: str
    size: int


class IngestionPipeline:
    """
    Orchestrates one upload from raw stream to content hash.

    The pipeline is the only writer of both caches. It is created once per
    application and shared by every request worker; the caches serialize
    their own mutation.
    """

    def __init__(self, store: ContentStore, existence_cache: ExistenceCache, gallery_cache: GalleryCache):
        self.store = store
        self.existence_cache = existence_cache
        self.gallery_cache = gallery_cache

    def ingest(self, stream: BinaryIO) -> str:
        """
        Ingest one uploaded file.

        Args:
            stream: Readable binary stream of the uploaded file part

        Returns:
            The content hash of the stored image

        Raises:
            StagingError: The upload could not be staged
            ConversionError: The upload is not a valid image or could not be stored
            CacheConsistencyError: The image is stored but the caches could not be updated
        """
        staged = self.stage(stream)
        logger.debug(f"Staged {staged.size} bytes at {staged.path}")

        try:
            content_id = self.store.normalize(staged.path)
        except DecodeError as e:
            raise ConversionError(f"Error converting upload: {e}") from e
        except OSError as e:
            raise ConversionError(f"Error storing upload: {e}") from e
        finally:
            # The store removes it; this covers a store that failed before doing so
            self._discard(staged.path)

        self._update_caches(content_id)
        return content_id

    def stage(self, stream: BinaryIO) -> StagedUpload:
        """
        Copy stream to a new file in the staging directory.

        The file name comes from a nanosecond timestamp and is created
        exclusively, so concurrent uploads never share a path.
        """
        for attempt in range(MAX_STAGING_ATTEMPTS):
            path = os.path.join(self.store.tmp_dir, staging_name(attempt))
            try:
                f = open(path, 'xb')
            except FileExistsError:
                continue
            except OSError as e:
                raise StagingError(f"Error saving upload: {e}") from e
            break
        else:
            raise StagingError("Could not allocate a staging file")

        size = 0
        try:
            with f:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    size += len(chunk)
        except (OSError, ValueError) as e:
            self._discard(path)
            raise StagingError(f"Error saving upload: {e}") from e

        if size == 0:
            self._discard(path)
            raise StagingError("Uploaded file is empty")

        return StagedUpload(path, size)

    def _update_caches(self, content_id: str):
        try:
            if self.existence_cache.add(content_id):
                logger.info(f"New image {content_id}")
            else:
                logger.info(f"Duplicate upload of {content_id}")
            self.gallery_cache.rebuild()
        except Exception as e:
            logger.critical(f"Cache update failed after storing {content_id}: {e}", exc_info=True)
            raise CacheConsistencyError(f"Cache update failed for {content_id}") from e

    @staticmethod
    def _discard(path: str):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
