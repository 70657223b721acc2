"""
Decorators for API endpoints.

This module provides decorators for consistent error handling and for
running the access gate before an endpoint body.
"""

from functools import wraps
from quart import request
from typing import Callable, Any
from werkzeug.exceptions import HTTPException

import config
from core.errors import ImageHostError
from utils.api_responses import error_response, not_found_response, success_response
from utils.logging_config import get_logger
from utils.request_helpers import get_service

logger = get_logger('Api')


def _is_missing_path(error: BaseException) -> bool:
    while error is not None:
        if isinstance(error, FileNotFoundError):
            return True
        error = error.__cause__
    return False


def api_handler(log_errors: bool = True):
    """
    Decorator for API endpoints that handles:
    - Mapping ImageHostError subclasses to their status code
    - Mapping missing-path errors to 404
    - Logging server-side errors with the remote address
    - Auto-wrapping dict responses

    HTTP exceptions from Quart (413, 405) pass through to the app handlers.

    Usage:
        @api_blueprint.route('/endpoint', methods=['POST'])
        @api_handler()
        async def my_endpoint():
            # Just the logic, no try/except needed
            return {"data": "value"}  # Auto-wrapped with success=True
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                result = await func(*args, **kwargs)

                if isinstance(result, dict):
                    if 'success' not in result:
                        result = {"success": True, **result}
                    return success_response(result, result.get('message'))

                return result

            except HTTPException:
                raise
            except Exception as e:
                if _is_missing_path(e):
                    return not_found_response()

                if isinstance(e, ImageHostError):
                    status_code, message = e.status_code, e.message
                elif isinstance(e, ValueError):
                    status_code, message = 400, str(e)
                else:
                    status_code, message = 500, str(e)

                if status_code >= 500 and log_errors:
                    cause = e.__cause__ or e
                    logger.error(
                        f"Returned {status_code} to {request.remote_addr} with error {message} (cause: {cause!r})",
                        exc_info=True,
                    )
                return error_response(message, status_code)

        return wrapper
    return decorator


def require_upload_access(func: Callable) -> Callable:
    """
    Decorator that runs the access gate before the endpoint.
    Use inside api_handler so AuthError maps to 401/403.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        gate = get_service('access_gate')
        gate.check(
            request.cookies.get(config.COOKIE_NAME),
            remote_addr=request.remote_addr,
            path=request.path,
        )
        return await func(*args, **kwargs)
    return wrapper
