import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error on {request.method} {request.url.path}: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error_dict = {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    from sqlmodel import SQLModel
    from src.depends import engine
    import src.domain.entities  # noqa: F401  registers tables

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Referral IAM API", version="0.1.0", lifespan=lifespan)
    app.state.config = ApplicationConfig

    if ApplicationConfig.DEV_MODE:
        logger.warning("DEV_MODE is enabled: development session cookies are accepted")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check, invitation, permissions, referral, tenant, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(tenant.router, tags=["Tenant"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(permissions.router, tags=["Permissions"])
    app.include_router(referral.router, tags=["Referrals"])
    app.include_router(admin.router, tags=["Admin"])
    # Catch-all referral links last
    app.include_router(referral.visit_router, tags=["Referrals"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
