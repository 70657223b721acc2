"""
Pytest fixtures and test configuration
"""
import io
import os
import shutil
import sys
import tempfile

import pytest
from PIL import Image

# Set testing environment variables BEFORE importing app modules
os.environ['TESTING'] = 'true'

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
import database.core
from core import ExistenceCache, GalleryCache
from services.content_store import ContentStore
from services.ingestion_service import IngestionPipeline

VALID_STATE = 'valid-session-state'


def make_image_bytes(color='red', size=(16, 16), fmt='PNG', mode='RGB'):
    """Encode a solid-color image."""
    buf = io.BytesIO()
    Image.new(mode, size, color=color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def content_dir(temp_dir):
    path = os.path.join(temp_dir, 'content')
    os.makedirs(path, exist_ok=True)
    return path


@pytest.fixture
def staging_dir(content_dir):
    path = os.path.join(content_dir, 'tmp')
    os.makedirs(path, exist_ok=True)
    return path


@pytest.fixture
def store(content_dir, staging_dir):
    return ContentStore(content_dir, staging_dir)


@pytest.fixture
def existence_cache():
    return ExistenceCache()


@pytest.fixture
def gallery_cache(store):
    cache = GalleryCache(store.list_images)
    cache.rebuild()
    return cache


@pytest.fixture
def pipeline(store, existence_cache, gallery_cache):
    return IngestionPipeline(store, existence_cache, gallery_cache)


@pytest.fixture
def red_png():
    return make_image_bytes('red')


@pytest.fixture
def blue_png():
    return make_image_bytes('blue')


def stored_files(content_dir):
    """All normalized artifacts under content_dir."""
    found = []
    for root, _, files in os.walk(content_dir):
        found.extend(os.path.join(root, f) for f in files if f.endswith(config.NORMALIZED_EXTENSION))
    return found


@pytest.fixture
def test_db_path(temp_dir, monkeypatch):
    """Point the users database at a temp file."""
    path = os.path.join(temp_dir, 'test_imagehost.db')
    monkeypatch.setattr(database.core, 'DB_FILE', path)
    database.core.initialize_database()
    return path


@pytest.fixture
def users_fixture(temp_dir):
    """YAML fixture with one known user."""
    path = os.path.join(temp_dir, 'users.yaml')
    with open(path, 'w') as f:
        f.write(
            "- model: User\n"
            "  rows:\n"
            "    - id: 1\n"
            "      name: tester\n"
            f"      state: {VALID_STATE}\n"
            "      whitelisted: true\n"
        )
    return path


@pytest.fixture
def app(temp_dir, content_dir, staging_dir, test_db_path, users_fixture, monkeypatch):
    """Create the Quart app configured for testing."""
    monkeypatch.setattr(config, 'CONTENT_DIRECTORY', content_dir)
    monkeypatch.setattr(config, 'TMP_DIRECTORY', staging_dir)
    monkeypatch.setattr(config, 'USERS_FIXTURE', users_fixture)
    monkeypatch.setattr(config, 'SAMPLE_USERS_FIXTURE', users_fixture)
    monkeypatch.setattr(config, 'ALLOW_UPLOAD', True)
    monkeypatch.setattr(config, 'LOG_FILE', None)

    from app import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Quart test client."""
    return app.test_client()


@pytest.fixture
def services(app):
    """The services registered on the app."""
    from utils.request_helpers import EXTENSION_KEY
    return app.extensions[EXTENSION_KEY]
