"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from bizbook_api.api.dependencies import get_request_id
from bizbook_api.api.middleware import RequestIDMiddleware, MetricsMiddleware
from bizbook_api.api.v1 import crud, dashboard, networth, payments, purchase_orders
from bizbook_api.domain.exceptions import (
    IdentityProviderError,
    InvalidCredentialsError,
    InvalidWindowError,
    PaymentTooSmallError,
)
from bizbook_api.infrastructure.observability.logging import setup_logging
from bizbook_api.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    body = {"success": False, "error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain, validation and database errors into the error envelope"""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"] if part != "body"),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return error_response(400, "Validation Error", details)

    @app.exception_handler(InvalidWindowError)
    async def invalid_window(request: Request, exc: InvalidWindowError):
        return error_response(400, str(exc))

    @app.exception_handler(PaymentTooSmallError)
    async def payment_too_small(request: Request, exc: PaymentTooSmallError):
        return error_response(400, str(exc))

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return error_response(403, "Invalid or expired token")

    @app.exception_handler(IntegrityError)
    async def integrity_error(request: Request, exc: IntegrityError):
        logging.warning(f"Integrity error: {exc.orig}", extra={"request_id": get_request_id(request)})
        return error_response(409, "Resource already exists")

    @app.exception_handler(IdentityProviderError)
    async def identity_unavailable(request: Request, exc: IdentityProviderError):
        return error_response(503, "Identity service unavailable")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return error_response(500, "Internal server error")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="BizBook Financial API",
        description="Personal and business finance tracking: accounts, payments, net worth",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(crud.router, prefix="/v1", tags=["records"])
    app.include_router(purchase_orders.router, prefix="/v1", tags=["purchase-orders"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(networth.router, prefix="/v1", tags=["net-worth"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
