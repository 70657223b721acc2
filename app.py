import config
from quart import Quart, request
from dotenv import load_dotenv
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

load_dotenv(override=True)

from routers import main_blueprint, api_blueprint
from core import ExistenceCache, GalleryCache
from database import load_users_fixture
from services.access_gate import AccessGate
from services.content_store import ContentStore
from services.ingestion_service import IngestionPipeline
from utils import error_response, method_not_allowed_response, not_found_response
from utils.logging_config import setup_logging, get_logger
from utils.request_helpers import EXTENSION_KEY


def build_services(store=None, access_gate=None):
    """
    Build the process-wide services.

    The caches are created here from the durable store and live as long as
    the app does. The pipeline is their only writer.
    """
    logger = get_logger('App')

    store = store or ContentStore(config.CONTENT_DIRECTORY, config.TMP_DIRECTORY)
    store.purge_staging()

    existence_cache = ExistenceCache(store.list_ids())
    gallery_cache = GalleryCache(store.list_images)
    gallery_cache.rebuild()
    logger.info(f"Loaded {len(existence_cache)} known image(s) from {store.content_dir}")

    return {
        'store': store,
        'existence_cache': existence_cache,
        'gallery_cache': gallery_cache,
        'pipeline': IngestionPipeline(store, existence_cache, gallery_cache),
        'access_gate': access_gate or AccessGate(),
    }


def create_app(store=None, access_gate=None, load_users=True):
    """Create and configure the Quart application."""
    setup_logging()
    logger = get_logger('App')
    logger.info(f"Initializing {config.APP_NAME}...")

    app = Quart(__name__)
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH

    if load_users:
        load_users_fixture()

    app.extensions[EXTENSION_KEY] = build_services(store, access_gate)

    app.register_blueprint(main_blueprint)
    app.register_blueprint(api_blueprint, url_prefix='/api')

    @app.errorhandler(MethodNotAllowed)
    async def handle_method_not_allowed(error):
        prefix = '/api/' if request.path.startswith('/api/') else request.path
        return method_not_allowed_response(request.method, prefix)

    @app.errorhandler(NotFound)
    async def handle_not_found(error):
        return not_found_response()

    @app.errorhandler(RequestEntityTooLarge)
    async def handle_too_large(error):
        return error_response("Upload too large", 413)

    if app.extensions[EXTENSION_KEY]['access_gate'].allow_upload:
        logger.info("Uploads are enabled")
    else:
        logger.warning("Uploads are disabled (set ALLOW_UPLOAD=true to enable)")

    return app


if __name__ == '__main__':
    import uvicorn
    app = create_app()
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")
