import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from yoga_admin.config import settings
from yoga_admin.core.exceptions import AuthzError
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.articles import routes as articles_routes
from yoga_admin.modules.assignments import routes as assignments_routes
from yoga_admin.modules.auth import routes as auth_routes
from yoga_admin.modules.bookings import routes as bookings_routes
from yoga_admin.modules.inquiries import routes as inquiries_routes
from yoga_admin.modules.roles import routes as roles_routes
from yoga_admin.modules.roles.service import RoleCatalogService
from yoga_admin.modules.users import routes as users_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(AuthzError)
async def authz_exception_handler(request: Request, exc: AuthzError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(roles_routes.router, prefix="/api/v1")
app.include_router(assignments_routes.router, prefix="/api/v1")
app.include_router(bookings_routes.router, prefix="/api/v1")
app.include_router(inquiries_routes.queries_router, prefix="/api/v1")
app.include_router(inquiries_routes.messages_router, prefix="/api/v1")
app.include_router(articles_routes.router, prefix="/api/v1")
app.include_router(users_routes.router, prefix="/api/v1")


def check_role_catalog(service: RoleCatalogService) -> None:
    """Fail fast when predefined roles are missing from the roles table"""
    report = service.validate_catalog()
    if not report.is_complete:
        raise RuntimeError(
            "Role catalog is missing predefined roles: " + ", ".join(report.missing)
            + ". Run yoga_admin/scripts/seed_roles.py."
        )


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if settings.validate_role_catalog:
        check_role_catalog(RoleCatalogService(get_supabase()))
        logger.info("Role catalog validated")
    if settings.legacy_admin_fallback:
        logger.warning("Legacy admin_users fallback is enabled for admin checks")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to yoga-admin", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with store checks if needed."""
    return {"status": "ready"}
