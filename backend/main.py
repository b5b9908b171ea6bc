import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.error_handlers import register_error_handlers
from backend.core import config
from backend.core.errors import StorageError
from backend.routes import assessment_routes, auth_routes, group_routes, resource_routes, session_routes
from backend.storage.base import EntityStore
from backend.storage.factory import build_store
from backend.storage.seeds import build_seed_data

logger = logging.getLogger(__name__)


def create_app(
    store: EntityStore | None = None,
    strict_session_transitions: bool | None = None,
    allow_admin_registration: bool | None = None,
) -> FastAPI:
    config.validate_runtime_config()

    app = FastAPI(title='Student Wellness API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.state.store = store if store is not None else build_store()
    app.state.strict_session_transitions = (
        config.STRICT_SESSION_TRANSITIONS if strict_session_transitions is None else strict_session_transitions
    )
    app.state.allow_admin_registration = (
        config.ALLOW_ADMIN_REGISTRATION if allow_admin_registration is None else allow_admin_registration
    )

    @app.on_event('startup')
    def initialize_store() -> None:
        try:
            app.state.store.initialize(build_seed_data())
        except StorageError:
            logger.exception('Storage initialization failed. Check STORAGE_BACKEND, DATABASE_URL and DATA_DIR.')
            raise

    @app.get('/health')
    def health():
        return {'status': 'OK', 'message': 'Server is running'}

    register_error_handlers(app)

    app.include_router(auth_routes.router, prefix='/auth')
    app.include_router(resource_routes.router, prefix='/resources')
    app.include_router(session_routes.router, prefix='/sessions')
    app.include_router(group_routes.router, prefix='/groups')
    app.include_router(assessment_routes.router, prefix='/assessments')

    return app


logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = create_app()
