"""
imagehost Test Suite

Test organization:
- test_existence_cache.py: Existence cache membership and ordering
- test_gallery_cache.py: Gallery snapshots and pagination
- test_content_store.py: Normalization, hashing and first-writer-wins storage
- test_ingestion_service.py: Upload pipeline and cache consistency
- test_access_gate.py: Upload authorization decisions
- test_users.py: Users table and YAML fixture loading
- test_upload_api.py: HTTP endpoints end to end
- test_api_responses.py, test_decorators.py, test_file_utils.py: Utilities
- test_logging_config.py: Logger setup from config
- conftest.py: Shared fixtures and test utilities
"""
