"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meal_distribution.api.meals import ERROR_STATUS
from meal_distribution.api.meals import router as meals_router
from meal_distribution.app_logging import configure_logging
from meal_distribution.containers import AppContainer
from meal_distribution.domain.errors import DistributionError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Meal Distribution")
    app.state.container = container

    app.include_router(meals_router)

    @app.exception_handler(DistributionError)
    async def distribution_error_handler(
        request: Request, exc: DistributionError
    ) -> JSONResponse:
        error_type = type(exc).__name__
        logger.info(
            "Request failed: path=%s error_type=%s error=%s",
            request.url.path,
            error_type,
            exc,
        )
        return JSONResponse(
            status_code=ERROR_STATUS.get(error_type, 400),
            content={"success": False, "error": str(exc), "error_type": error_type},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return await distribution_error_handler(
            request, ValidationError(describe_validation_errors(exc))
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Join request validation errors into a single message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"
