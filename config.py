"""
Centralized configuration for all modules
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application name (shown in logs and the gallery payload)
APP_NAME = os.environ.get('APP_NAME', 'imagehost')

# ==================== PATHS ====================

# Content-addressed image storage, one artifact per content hash
CONTENT_DIRECTORY = os.environ.get('CONTENT_DIRECTORY', './www/content')

# Staging area for raw uploads, cleaned of residue on startup
TMP_DIRECTORY = os.environ.get('TMP_DIRECTORY', './www/content/tmp')

# User store
DATABASE_PATH = os.environ.get('DATABASE_PATH', './imagehost.db')
USERS_FIXTURE = os.environ.get('USERS_FIXTURE', './fixtures/users.yaml')
SAMPLE_USERS_FIXTURE = os.environ.get('SAMPLE_USERS_FIXTURE', './fixtures/sample-users.yaml')

# ==================== UPLOADS ====================

# Process-wide switch for the upload API
ALLOW_UPLOAD = os.environ.get('ALLOW_UPLOAD', 'False').lower() == 'true'

# Cookie carrying the session state that is looked up in the users table
COOKIE_NAME = os.environ.get('COOKIE_NAME', 'session_state')

# Format that every stored image is normalized to before hashing
NORMALIZED_FORMAT = 'PNG'
NORMALIZED_EXTENSION = '.png'

# Number of hex chars of the content hash used as the bucket directory
BUCKET_CHARS = 2

# Largest accepted request body
MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 50 * 1024 * 1024))

# ==================== RESPONSES ====================

IMAGE_HASH_HEADER = 'X-Image-Hash'
SERVER_MESSAGE_HEADER = 'X-Server-Message'

# Pagination
GALLERY_PAGE_SIZE = int(os.environ.get('GALLERY_PAGE_SIZE', 100))

# ==================== LOGGING ====================

# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FILE = os.environ.get('LOG_FILE') or None
LOG_FORMAT = os.environ.get('LOG_FORMAT', '%(asctime)s [%(name)s] %(levelname)s: %(message)s')

# ==================== WEB SERVER ====================

HOST = os.environ.get('HOST', '0.0.0.0')
PORT = int(os.environ.get('PORT', 5000))
