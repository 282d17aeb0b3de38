import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth.routes import auth_backend, fastapi_users
from app.auth.dependencies import get_session_context
from app.auth.messages import translate_auth_error
from app.auth.roles import SessionContext
from app.api import (
    shift_routes,
    task_routes,
    announcement_routes,
    gallery_routes,
    employee_routes,
    profile_routes,
    dashboard_routes,
)
from app.core.config import settings
from app.core.logging import configure_logging
from app.db import create_db_and_tables
from app.schemas.user import UserRead, UserCreate, UserUpdate
import app.models  # registers all models via models/__init__.py

configure_logging()
log = logging.getLogger(__name__)

# Create the FastAPI app
app = FastAPI()


# ✅ Swagger Bearer token support for "Authorize" button
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Hospoda Vesnice API",
        version="0.1.0",
        description="Shifts, tasks, announcements and the photo gallery for the Hospoda Vesnice team.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    for path in openapi_schema["paths"].values():
        for operation in path.values():
            operation["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


# ✅ Localized messages for known auth failures
@app.exception_handler(StarletteHTTPException)
async def auth_error_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/auth"):
        message = translate_auth_error(exc.detail)
        if message:
            log.info("auth error %s on %s", exc.detail, request.url.path)
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": exc.detail, "message": message},
                headers=getattr(exc, "headers", None),
            )
    return await http_exception_handler(request, exc)


# ✅ Auth routes
app.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["auth"]
)

app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["auth"]
)

app.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate),
    prefix="/auth/users",
    tags=["auth"]
)

# ✅ Allow frontend dev (CORS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/whoami")
async def whoami(ctx: SessionContext = Depends(get_session_context)):
    return {"uid": ctx.uid, "display_name": ctx.display_name, "role": ctx.role, "is_admin": ctx.is_admin}

@app.on_event("startup")
async def on_startup():
    print("🔧 Starting DB setup...")
    await create_db_and_tables()
    print("✅ DB schema ready.")


# ✅ Core app routers
app.include_router(shift_routes.router, prefix="/shifts")
app.include_router(task_routes.router, prefix="/tasks")
app.include_router(announcement_routes.router, prefix="/announcements")
app.include_router(gallery_routes.router, prefix="/gallery")
app.include_router(employee_routes.router)
app.include_router(profile_routes.router)
app.include_router(dashboard_routes.router)
