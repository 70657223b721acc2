"""
Tests for file utilities (utils/file_utils.py)
"""
import os

import config
from utils import file_utils
from utils.file_utils import (
    ensure_bucket_dir,
    get_bucketed_filepath_on_disk,
    get_bucketed_path,
    get_hash_bucket,
    is_content_id,
    staging_name,
)

CONTENT_ID = 'ab' + 'c' * 62


class TestHashBucket:

    def test_uses_leading_chars(self):
        assert get_hash_bucket(CONTENT_ID) == 'ab'

    def test_custom_width(self):
        assert get_hash_bucket(CONTENT_ID, bucket_chars=3) == 'abc'


class TestBucketedPaths:

    def test_url_path(self):
        assert get_bucketed_path(CONTENT_ID) == f"content/ab/{CONTENT_ID}.png"

    def test_disk_path(self, temp_dir):
        assert get_bucketed_filepath_on_disk(CONTENT_ID, temp_dir) == os.path.join(temp_dir, 'ab', f"{CONTENT_ID}.png")

    def test_disk_path_defaults_to_config(self, temp_dir, monkeypatch):
        monkeypatch.setattr(config, 'CONTENT_DIRECTORY', temp_dir)
        assert get_bucketed_filepath_on_disk(CONTENT_ID).startswith(temp_dir)

    def test_ensure_bucket_dir(self, temp_dir):
        bucket_dir = ensure_bucket_dir(CONTENT_ID, temp_dir)
        assert os.path.isdir(bucket_dir)
        assert bucket_dir == os.path.join(temp_dir, 'ab')
        # Idempotent
        assert ensure_bucket_dir(CONTENT_ID, temp_dir) == bucket_dir


class TestIsContentId:

    def test_valid(self):
        assert is_content_id('0' * 64)
        assert is_content_id(CONTENT_ID)

    def test_invalid(self):
        assert not is_content_id('')
        assert not is_content_id(None)
        assert not is_content_id('A' * 64)
        assert not is_content_id('0' * 63)
        assert not is_content_id('../' + '0' * 61)


class TestStagingName:

    def test_timestamp_based(self, monkeypatch):
        monkeypatch.setattr(file_utils.time, 'time_ns', lambda: 1234567890123456789)
        assert staging_name() == '1234567890123456789'
        assert staging_name(2) == '1234567890123456789-2'
