"""
Gallery browsing and image serving routes.
"""

from quart import request, send_file

import config
from core.errors import NotFoundError
from utils import api_handler, get_positive_int, get_service, is_content_id


def register_routes(blueprint):
    """Register gallery routes on the given blueprint."""

    @blueprint.route('/gallery')
    @api_handler()
    async def gallery():
        """One page of the current gallery snapshot."""
        page = get_positive_int(request, 'page', 1)
        per_page = min(get_positive_int(request, 'per_page', config.GALLERY_PAGE_SIZE), config.GALLERY_PAGE_SIZE)
        return {"app_name": config.APP_NAME, **get_service('gallery_cache').page(page, per_page)}

    @blueprint.route('/content/<content_id>')
    @api_handler()
    async def content(content_id):
        """Serve a stored image by its content hash."""
        content_id = content_id.lower()
        if content_id.endswith(config.NORMALIZED_EXTENSION):
            content_id = content_id[:-len(config.NORMALIZED_EXTENSION)]
        if not is_content_id(content_id):
            raise NotFoundError(f"Not a content hash: {content_id}")

        # The existence cache may trail the store, so a miss falls through
        # to the store before answering 404
        if not get_service('existence_cache').contains(content_id):
            if not get_service('store').exists(content_id):
                raise NotFoundError(f"Image not found: {content_id}")

        path = get_service('store').path_for(content_id)
        response = await send_file(path, mimetype='image/png')
        response.headers[config.IMAGE_HASH_HEADER] = content_id
        response.headers['Cache-Control'] = 'public, max-age=31536000, immutable'
        return response
