from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.common.error_handlers import register_error_handlers
from app.core.config import Settings, settings as default_settings
from app.core.dependencies import build_repository
from app.repositories.item_repository import ItemRepository
from app.schemas.item import HealthResponse
from app.api.v1 import dashboard, item
from app.logger_config import logger


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ItemRepository] = None,
) -> FastAPI:
    settings = settings or default_settings
    logger.setLevel(settings.LOG_LEVEL.upper())
    app = FastAPI(title=settings.SERVICE_NAME, version="1.0.0")

    app.state.settings = settings
    app.state.repository = repository if repository is not None else build_repository(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register API routers
    app.include_router(item.router, prefix="/api/items", tags=["items"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", service=settings.SERVICE_NAME)

    logger.info(f"{settings.SERVICE_NAME} configured ({settings.APP_ENV})")
    return app


app = create_app()
