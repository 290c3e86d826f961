import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config.settings import Settings
from .routes import autocomplete_routes, health_routes, keyword_routes
from .services.container import ServiceContainer
from .services.exceptions import IndexBootstrapError

logger = logging.getLogger(__name__)

_LOGGING_CONFIGURED = False


def _ensure_logging(level: str) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    package_logger = logging.getLogger("autocomplete_api")
    uvicorn_logger = logging.getLogger("uvicorn.error")

    handlers = list(uvicorn_logger.handlers)
    if handlers:
        package_logger.handlers = []
        for handler in handlers:
            package_logger.addHandler(handler)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        package_logger.addHandler(handler)

    package_logger.setLevel(getattr(logging, level, logging.INFO))
    _LOGGING_CONFIGURED = True


def create_app(settings: Optional[Settings] = None, container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The service container (and with it the Elasticsearch client) is built at startup unless
    one is injected. Startup fails if the suggestion index cannot be confirmed or created.
    """
    settings = settings or (container.settings if container is not None else Settings())
    _ensure_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version
    )

    app.include_router(health_routes.router, tags=["health"])
    app.include_router(keyword_routes.router, tags=["keywords"])
    app.include_router(autocomplete_routes.router, tags=["autocomplete"])

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies and parameters as 400 rather than 422"""
        logger.info("request.invalid path=%s errors=%s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": "invalid request"})

    @app.on_event("startup")
    async def startup_event():
        """Build services and make sure the suggestion index exists"""
        logger.info(
            "app.start title=%s version=%s elasticsearch=%s index=%s",
            settings.api_title,
            settings.api_version,
            settings.elasticsearch_url,
            settings.index_name
        )
        app.state.container = container or ServiceContainer(settings)
        try:
            await app.state.container.index_service.ensure_index()
        except IndexBootstrapError:
            await app.state.container.elasticsearch_service.close()
            raise

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the Elasticsearch client"""
        logger.info("app.stop title=%s", settings.api_title)
        await app.state.container.elasticsearch_service.close()

    return app


app = create_app()
