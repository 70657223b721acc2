"""
Request helpers for routes.

Provides access to the application-owned services and consistent parsing
of query parameters.
"""

from typing import Any

from quart import current_app

EXTENSION_KEY = 'imagehost'


def get_service(name: str) -> Any:
    """
    Look up a service registered on the running app by create_app().

    Args:
        name: One of 'store', 'existence_cache', 'gallery_cache',
              'pipeline', 'access_gate'

    Raises:
        KeyError: If the service is not registered
    """
    return current_app.extensions[EXTENSION_KEY][name]


def get_positive_int(request: Any, name: str, default: int) -> int:
    """
    Parse a positive integer query parameter.

    Raises:
        ValueError: If the value is present but not a positive integer
    """
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"'{name}' must be an integer")
    if value < 1:
        raise ValueError(f"'{name}' must be positive")
    return value
