import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenant_service.core.config import settings
from tenant_service.core.database import SessionLocal, init_db
from tenant_service.core.deps import get_token_service
from tenant_service.core.errors import register_exception_handlers
from tenant_service.core.logging_config import configure_logging
from tenant_service.routes.auth import router as auth_router
from tenant_service.routes.health import router as health_router
from tenant_service.routes.preferences import router as preferences_router
from tenant_service.routes.subscriptions import router as subscriptions_router
from tenant_service.routes.tenants import router as tenants_router
from tenant_service.routes.users import router as users_router
from tenant_service.services.seed import seed_demo


logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    # Fails fast on an empty secret or a refresh TTL shorter than the access TTL
    get_token_service()
    app = FastAPI(title="Tenant Service API", version="0.1.0")

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix=f"{API_PREFIX}/auth", tags=["auth"])
    app.include_router(tenants_router, prefix=f"{API_PREFIX}/tenants", tags=["tenants"])
    app.include_router(users_router, prefix=f"{API_PREFIX}/tenants/{{tenant_id}}/users", tags=["users"])
    app.include_router(
        preferences_router, prefix=f"{API_PREFIX}/tenants/{{tenant_id}}/preferences", tags=["preferences"]
    )
    app.include_router(
        subscriptions_router, prefix=f"{API_PREFIX}/tenants/{{tenant_id}}/subscriptions", tags=["subscriptions"]
    )

    return app


app = create_app()

# Only seed in development or when explicitly requested
if settings.env == "dev" or os.getenv("FORCE_SEED") == "true":
    try:
        init_db()
        with SessionLocal() as db:
            seed_demo(db)
    except Exception:
        logger.exception("Development database bootstrap failed")
