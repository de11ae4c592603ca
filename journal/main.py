"""Journal CMS backend: public article pages and the admin API."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from journal.configs import settings
from journal.errors import (
    BaseAppError,
    DatabaseError,
    ForbiddenError,
    PasswordHashingError,
    UnauthenticatedError,
    UploadError,
    UpstreamServiceError,
    ValidationError,
    app_validation_exception_handler,
    auth_exception_handler,
    create_exception_handler,
    database_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from journal.managers import limiter, rate_limit_exceeded_handler
from journal.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from journal.monitoring import get_logger
from journal.monitoring.health import setup_health_routes
from journal.routes import (
    admin_router,
    articles_router,
    auth_router,
    media_router,
    profile_router,
    settings_router,
    upload_router,
    users_router,
)
from journal.services.storage.local import MEDIA_URL_PREFIX
from journal.utils.helpers import today_str

logger = get_logger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title=settings.APP_NAME,
    description="Personal blog CMS: public articles plus an authenticated admin area.",
    version=VERSION,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [
    articles_router,
    settings_router,
    admin_router,
    users_router,
    media_router,
    upload_router,
    profile_router,
    auth_router,
]

_ = [app.include_router(router) for router in routes]

setup_health_routes(app)

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (DatabaseError, database_exception_handler),
    (UnauthenticatedError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (PasswordHashingError, auth_exception_handler),
    (ValidationError, app_validation_exception_handler),
    (UploadError, upload_exception_handler),
    (UpstreamServiceError, upload_exception_handler),
    (BaseAppError, create_exception_handler(logger)),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter

if settings.STORAGE_PROVIDER == "local":
    app.mount(
        MEDIA_URL_PREFIX,
        StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
        name="media",
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Service information",
    response_class=ORJSONResponse,
    operation_id="root",
)
@limiter.exempt
async def root(request: Request) -> ORJSONResponse:
    """
    Basic service information.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Name, version, date and documentation link.
    """
    return ORJSONResponse(
        content={
            "name": app.title,
            "version": VERSION,
            "environment": settings.ENVIRONMENT,
            "date": today_str(),
            "docs": "/docs",
        },
    )
