"""
'api/middleware.py': Cross-cutting HTTP middleware and error handlers.
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from werkzeug.exceptions import HTTPException as WerkzeugHTTPException

from ..exceptions import MissingRequiredFieldsError, DatastoreError


def install_middleware(app: FastAPI, logger: logging.Logger) -> None:
    """Register OPTIONS short-circuit, request logging and permissive CORS."""

    @app.middleware("http")
    async def options_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return await call_next(request)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def install_error_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """Map domain and transport errors to plain-text responses."""

    @app.exception_handler(WerkzeugHTTPException)
    async def werkzeug_error_handler(request: Request, exc: WerkzeugHTTPException):
        return PlainTextResponse(exc.description or "", status_code=exc.code or 500)

    @app.exception_handler(MissingRequiredFieldsError)
    async def missing_fields_handler(request: Request, exc: MissingRequiredFieldsError):
        logger.error(f"[{request.url.path}] {exc}")
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.error(f"[{request.url.path}] Invalid request body: {exc.errors()}")
        return PlainTextResponse("Invalid request body", status_code=400)

    @app.exception_handler(DatastoreError)
    async def datastore_error_handler(request: Request, exc: DatastoreError):
        logger.error(f"[{request.url.path}] {exc}")
        return PlainTextResponse("Internal server error", status_code=500)
