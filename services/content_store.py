"""
Content-addressed image storage.

Each stored image lives at CONTENT_DIRECTORY/<bucket>/<hash>.png, where
<hash> is the SHA-256 of the normalized PNG bytes. Publishing goes through
a private temp file in the bucket followed by os.link(), which fails if
the target exists, so concurrent writers of the same content resolve to
first-writer-wins and no partially written file is ever visible at the
final path.
"""

import hashlib
import io
import os
import struct
import tempfile
from dataclasses import dataclass
from typing import List

from PIL import Image, ImageOps, ImageSequence, UnidentifiedImageError

import config
from core.errors import DecodeError
from utils.file_utils import (
    ensure_bucket_dir,
    get_bucketed_filepath_on_disk,
    get_bucketed_path,
    is_content_id,
)
from utils.logging_config import get_logger

logger = get_logger('ContentStore')

# Modes the PNG encoder takes as-is
_KEEP_MODES = ('1', 'L', 'LA', 'I', 'I;16', 'RGB', 'RGBA')

# Errors Pillow raises for bytes that are not a usable image
_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    SyntaxError,
    ValueError,
    EOFError,
    struct.error,
)


@dataclass(frozen=True)
class StoredImage:
    """A durable artifact in the content store."""
    content_id: str
    path: str
    size: int
    modified: float

    def to_dict(self):
        return {
            "hash": self.content_id,
            "path": get_bucketed_path(self.content_id),
            "size": self.size,
            "modified": self.modified,
        }


def _normalize_mode(image):
    """Copy of image in a PNG-friendly mode with metadata stripped."""
    if image.mode in _KEEP_MODES:
        normalized = image.copy()
    elif image.mode in ('P', 'PA'):
        has_alpha = image.mode == 'PA' or 'transparency' in image.info
        normalized = image.convert('RGBA' if has_alpha else 'RGB')
    elif 'A' in image.getbands():
        normalized = image.convert('RGBA')
    else:
        normalized = image.convert('RGB')
    normalized.info = {}
    return normalized


def normalize_image_bytes(path: str) -> bytes:
    """
    Decode the image at path and re-encode it as PNG.

    EXIF orientation is applied and all ancillary metadata is dropped, so
    the same pixels always produce the same bytes. Animated inputs keep
    every frame and their durations.

    Raises:
        DecodeError: The file is not a decodable image
        OSError: The file could not be read
    """
    try:
        # verify() leaves the image unusable, so decode from a fresh handle
        with Image.open(path) as candidate:
            candidate.verify()

        out = io.BytesIO()
        with Image.open(path) as image:
            if getattr(image, 'n_frames', 1) > 1:
                frames = []
                durations = []
                for frame in ImageSequence.Iterator(image):
                    durations.append(frame.info.get('duration', 100))
                    frames.append(_normalize_mode(frame.convert('RGBA')))
                frames[0].save(
                    out,
                    format=config.NORMALIZED_FORMAT,
                    save_all=True,
                    append_images=frames[1:],
                    duration=durations,
                    loop=image.info.get('loop', 0),
                )
            else:
                image.load()
                _normalize_mode(ImageOps.exif_transpose(image)).save(out, format=config.NORMALIZED_FORMAT)
        return out.getvalue()
    except _DECODE_ERRORS as e:
        raise DecodeError(f"Not a valid image: {e}") from e


def compute_content_id(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class ContentStore:
    """Durable, content-addressed storage of normalized image bytes."""

    def __init__(self, content_dir: str = None, tmp_dir: str = None):
        self.content_dir = content_dir or config.CONTENT_DIRECTORY
        self.tmp_dir = tmp_dir or config.TMP_DIRECTORY
        os.makedirs(self.content_dir, exist_ok=True)
        os.makedirs(self.tmp_dir, exist_ok=True)

    def normalize(self, temp_path: str) -> str:
        """
        Normalize a staged upload, store it and return its content hash.

        The staged file is always removed. If the artifact already exists
        the existing copy is kept and the hash is still returned.

        Raises:
            DecodeError: The staged file is not a valid image
            OSError: Reading the staged file or writing the artifact failed
        """
        try:
            data = normalize_image_bytes(temp_path)
            content_id = compute_content_id(data)
            if self._publish(content_id, data):
                logger.info(f"Stored {content_id} ({len(data)} bytes)")
            else:
                logger.info(f"Already stored: {content_id}")
            return content_id
        finally:
            self._remove_quietly(temp_path)

    def _publish(self, content_id: str, data: bytes) -> bool:
        """Write data at the final path unless it exists. True if this call wrote it."""
        final_path = get_bucketed_filepath_on_disk(content_id, self.content_dir)
        if os.path.exists(final_path):
            return False

        bucket_dir = ensure_bucket_dir(content_id, self.content_dir)
        fd, part_path = tempfile.mkstemp(prefix=f".{content_id}.", suffix='.part', dir=bucket_dir)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            try:
                os.link(part_path, final_path)
            except FileExistsError:
                # Another writer published the same content first
                return False
            return True
        finally:
            self._remove_quietly(part_path)

    def exists(self, content_id: str) -> bool:
        if not is_content_id(content_id):
            return False
        return os.path.isfile(get_bucketed_filepath_on_disk(content_id, self.content_dir))

    def path_for(self, content_id: str) -> str:
        """
        Absolute path of a stored image.

        Raises:
            FileNotFoundError: Nothing is stored under content_id
        """
        if not self.exists(content_id):
            raise FileNotFoundError(f"Image not found: {content_id}")
        return os.path.abspath(get_bucketed_filepath_on_disk(content_id, self.content_dir))

    def list_images(self) -> List[StoredImage]:
        """All stored images, newest first."""
        images = []
        try:
            buckets = os.listdir(self.content_dir)
        except FileNotFoundError:
            return images

        for bucket in buckets:
            if len(bucket) != config.BUCKET_CHARS:
                continue
            bucket_dir = os.path.join(self.content_dir, bucket)
            if not os.path.isdir(bucket_dir):
                continue
            for filename in os.listdir(bucket_dir):
                stem, ext = os.path.splitext(filename)
                if ext != config.NORMALIZED_EXTENSION or not is_content_id(stem):
                    continue
                path = os.path.join(bucket_dir, filename)
                try:
                    st = os.stat(path)
                except FileNotFoundError:
                    continue
                images.append(StoredImage(stem, path, st.st_size, st.st_mtime))

        images.sort(key=lambda img: (-img.modified, img.content_id))
        return images

    def list_ids(self) -> List[str]:
        """Stored content hashes, oldest first."""
        return [img.content_id for img in reversed(self.list_images())]

    def purge_staging(self) -> int:
        """Remove residue left in the staging directory. Returns the count removed."""
        removed = 0
        for entry in os.scandir(self.tmp_dir):
            if entry.is_file(follow_symlinks=False):
                if self._remove_quietly(entry.path):
                    removed += 1
        if removed:
            logger.warning(f"Removed {removed} stale staging file(s) from {self.tmp_dir}")
        return removed

    @staticmethod
    def _remove_quietly(path: str) -> bool:
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
            return False
