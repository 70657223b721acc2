import asyncio

from quart import request

import config
from core.errors import MethodError, NotFoundError, StagingError
from . import api_blueprint
from utils import api_handler, generic_response, get_logger, get_service, require_upload_access

logger = get_logger('Upload')

# Everything but POST under /api/ is refused before the flag or the path is looked at
REFUSED_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


@api_blueprint.route('/upload', methods=['POST'])
@api_handler()
@require_upload_access
async def upload():
    """Store one uploaded image and report its content hash."""
    files = await request.files
    upload_file = files.get('file')
    if upload_file is None:
        raise StagingError("No file part named 'file' in the upload")

    stream = upload_file.stream
    stream.seek(0)

    pipeline = get_service('pipeline')
    content_id = await asyncio.to_thread(pipeline.ingest, stream)

    logger.info(f"Upload from {request.remote_addr} stored as {content_id}")
    return generic_response(201, "Created", {config.IMAGE_HASH_HEADER: content_id}, {"hash": content_id})


@api_blueprint.route('/', defaults={'subpath': ''}, methods=['POST'])
@api_blueprint.route('/<path:subpath>', methods=['POST'])
@api_handler()
async def unknown_endpoint(subpath):
    get_service('access_gate').check_enabled(remote_addr=request.remote_addr, path=request.path)
    raise NotFoundError(f"No API endpoint at /api/{subpath}")


@api_blueprint.route('/', defaults={'subpath': ''}, methods=REFUSED_METHODS)
@api_blueprint.route('/<path:subpath>', methods=REFUSED_METHODS)
@api_handler()
async def refuse_method(subpath):
    raise MethodError(f"Cannot {request.method} on /api/")
