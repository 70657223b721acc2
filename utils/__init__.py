from .file_utils import get_hash_bucket, get_bucketed_path, get_bucketed_filepath_on_disk, is_content_id
from .api_responses import (
    generic_response,
    success_response,
    error_response,
    not_found_response,
    method_not_allowed_response,
)
from .decorators import api_handler, require_upload_access
from .logging_config import setup_logging, get_logger
from .request_helpers import get_service, get_positive_int

__all__ = [
    'get_hash_bucket',
    'get_bucketed_path',
    'get_bucketed_filepath_on_disk',
    'is_content_id',
    'generic_response',
    'success_response',
    'error_response',
    'not_found_response',
    'method_not_allowed_response',
    'api_handler',
    'require_upload_access',
    'setup_logging',
    'get_logger',
    'get_service',
    'get_positive_int',
]
