import os
import re
import time

import config

_CONTENT_ID_RE = re.compile(r'^[0-9a-f]{64}$')


def get_hash_bucket(content_id, bucket_chars=None):
    """
    Bucket directory for a content hash.

    The hash is already uniformly distributed, so its leading hex chars
    are used directly.

    Args:
        content_id: Hex content hash
        bucket_chars: Number of hex chars to use (default config.BUCKET_CHARS)

    Returns:
        Bucket directory name (e.g., "a3")
    """
    if bucket_chars is None:
        bucket_chars = config.BUCKET_CHARS
    return content_id[:bucket_chars]


def get_content_filename(content_id):
    return f"{content_id}{config.NORMALIZED_EXTENSION}"


def get_bucketed_path(content_id, base_dir="content"):
    """
    Get the URL-style bucketed path for a stored image.

    Returns:
        Path like "content/a3/a3f...e1.png"
    """
    bucket = get_hash_bucket(content_id)
    return f"{base_dir}/{bucket}/{get_content_filename(content_id)}"


def get_bucketed_filepath_on_disk(content_id, base_dir=None):
    """
    Get the full filesystem path for a stored image.

    Returns:
        Path like "./www/content/a3/a3f...e1.png"
    """
    if base_dir is None:
        base_dir = config.CONTENT_DIRECTORY
    return os.path.join(base_dir, get_hash_bucket(content_id), get_content_filename(content_id))


def ensure_bucket_dir(content_id, base_dir=None):
    """
    Ensure the bucket directory exists for a content hash.

    Returns:
        The bucket directory path
    """
    if base_dir is None:
        base_dir = config.CONTENT_DIRECTORY
    bucket_dir = os.path.join(base_dir, get_hash_bucket(content_id))
    os.makedirs(bucket_dir, exist_ok=True)
    return bucket_dir


def is_content_id(value) -> bool:
    """True if value looks like a content hash (lowercase hex SHA-256)."""
    return bool(value) and bool(_CONTENT_ID_RE.match(value))


def staging_name(attempt: int = 0) -> str:
    """
    Name for a staged upload, derived from a nanosecond timestamp.

    attempt > 0 adds a suffix, used when an exclusive create collides.
    """
    name = str(time.time_ns())
    if attempt:
        name = f"{name}-{attempt}"
    return name
