"""
Web routes package.

This package contains the browse-side routes:
- gallery: Gallery listing and image serving
"""

from quart import Blueprint
from . import gallery

# Create main blueprint
main_blueprint = Blueprint('main', __name__)

# Register all routes directly on the main blueprint
gallery.register_routes(main_blueprint)

__all__ = ['main_blueprint']
