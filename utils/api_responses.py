"""
Standardized API response utilities.
All API endpoints should use these functions for consistent response format.

Every response carries the X-Server-Message header so clients that only
look at headers still get a diagnostic.
"""

from quart import jsonify, Response
from typing import Any, Dict, Optional, Tuple

import config


def _with_message(response: Response, message: str) -> Response:
    response.headers[config.SERVER_MESSAGE_HEADER] = message
    return response


def generic_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None,
                     data: Dict[str, Any] = None) -> Tuple[Response, int]:
    """
    Create a response with a status code and a diagnostic message.

    Args:
        status_code: HTTP status code
        message: Short message, also sent as X-Server-Message
        headers: Extra headers to set
        data: Additional data to include

    Example:
        return generic_response(201, "Created", {"X-Image-Hash": content_id})
    """
    body = {"success": status_code < 400, "message": message}
    if data:
        body.update(data)
    response = _with_message(jsonify(body), message)
    for name, value in (headers or {}).items():
        response.headers[name] = value
    return response, status_code


def success_response(data: Dict[str, Any] = None, message: str = None) -> Response:
    """
    Create a standardized success response.

    Example:
        return success_response({"count": 10}, "Operation completed")
        # Returns: {"success": True, "message": "Operation completed", "count": 10}
    """
    response = {"success": True}
    if message:
        response["message"] = message
    if data:
        response.update(data)
    return _with_message(jsonify(response), message or "OK")


def error_response(error: str, status_code: int = 400, data: Dict[str, Any] = None) -> Tuple[Response, int]:
    """
    Create a standardized error response.

    Example:
        return error_response("Invalid input", 400)
        # Returns: {"success": False, "error": "Invalid input"}, 400
    """
    response = {"success": False, "error": str(error)}
    if data:
        response.update(data)
    return _with_message(jsonify(response), f"{status_code} {error}"), status_code


def not_found_response(message: str = "Not Found") -> Tuple[Response, int]:
    """Create a 404 response."""
    return error_response(message, 404)


def method_not_allowed_response(method: str, prefix: str = "/api/") -> Tuple[Response, int]:
    """Create a 405 response naming the rejected method."""
    return error_response(f"Cannot {method} on {prefix}", 405)
