# todo_portal/main.py

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_portal.api.v1.api import api_router
from todo_portal.core.config import settings
from todo_portal.core.errors import ServiceError
from todo_portal.core.logging import configure_logging

logger = logging.getLogger(__name__)


def _error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
        parts.append(f"{'.'.join(loc)}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Bad Request", _describe_validation_error(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"
            return JSONResponse(status_code=exc.status_code, content=_error_body("Not Found", message))
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("Error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("[REQUEST] Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal Server Error", "An unexpected error occurred"),
        )


def create_application() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.debug,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- REQUEST LOG ----------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("[REQUEST] %s %s -> %d", request.method, request.url.path, response.status_code)
        return response

    register_exception_handlers(app)

    # ---------- ROUTES ----------
    @app.get("/", summary="Service info")
    def root():
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "status": "running",
            "endpoints": {
                "authentication": f"{settings.api_prefix}/auth",
                "todos": f"{settings.api_prefix}/todos",
                "userProfile": f"{settings.api_prefix}/users/profile",
            },
        }

    @app.get("/healthz", summary="Health check")
    def healthz():
        return {"status": "ok"}

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_application()


def run() -> None:
    """Entry point for the ``todo-portal`` console script."""
    logger.info("[STARTUP] %s listening on http://localhost:%d%s", settings.PROJECT_NAME, settings.port, settings.api_prefix)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
