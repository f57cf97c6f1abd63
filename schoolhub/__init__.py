#schoolhub/__init__.py
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings, get_database_url
from schoolhub.routes import auth, schools, examinations, results
from schoolhub.core.database import TenantConnectionRegistry
from schoolhub.core.errors import register_exception_handlers
from schoolhub.core.logging import logger
from schoolhub.core.model_factory import ModelRegistry
from schoolhub.middleware.request_id import RequestIDMiddleware
from schoolhub.schemas import ErrorResponse
from schoolhub.services import AuthService, SchoolService


def create_app(database_url: Optional[str] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-tenant school management API with one database per school",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    # One registry per process; handlers reach it through app.state
    app.state.tenants = TenantConnectionRegistry(base_url=database_url or get_database_url())
    app.state.models = ModelRegistry(app.state.tenants)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    error_responses = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)}

    # Include routers
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"], responses=error_responses)
    app.include_router(schools.router, prefix="/api/v1/schools", tags=["Schools"], responses=error_responses)
    app.include_router(examinations.router, prefix="/api/v1/examinations", tags=["Examinations"], responses=error_responses)
    app.include_router(results.router, prefix="/api/v1/results", tags=["Results"], responses=error_responses)

    @app.on_event("startup")
    async def startup_event():
        await init_system_partition(app)
        logger.info("Application startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.tenants.close_all()
        app.state.models.clear()
        logger.info("Application shutdown completed")

    return app


async def init_system_partition(app: FastAPI) -> None:
    """Create system tables, the configured super admin, and finish interrupted provisioning"""
    registry: TenantConnectionRegistry = app.state.tenants
    await registry.init_partition(await registry.get_connection())

    models: ModelRegistry = app.state.models
    admin = await AuthService(models).ensure_super_admin(
        settings.SUPER_ADMIN_EMAIL,
        settings.SUPER_ADMIN_PASSWORD
    )
    if admin is not None:
        logger.info("Super admin created successfully")

    await SchoolService(models).reconcile_pending_schools()
