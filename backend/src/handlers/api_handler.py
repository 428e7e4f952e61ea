"""FastAPI application for feedback intake, deployed on Lambda."""

import logging
import os
import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from models.settings import HelpdeskSettings
from services.feedback_service import FeedbackService
from services.feedback_validator import ValidationFailure, parse_submission
from services.helpdesk_service import HelpdeskError, HelpdeskService

logger = logging.getLogger(__name__)
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO"))

TICKET_PATH = "/api/create-ticket"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(
    title="Feedback Intake API",
    description="Forwards feedback form submissions to the helpdesk as tickets",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    """Answer preflight requests and add CORS headers to every response."""
    if request.method == "OPTIONS" and request.url.path == TICKET_PATH:
        response = Response(status_code=status.HTTP_204_NO_CONTENT)
    else:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled error on %s %s", request.method, request.url.path
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"success": False, "error": str(e)},
            )
    response.headers.update(CORS_HEADERS)
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all API requests with timing for CloudWatch monitoring."""
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000

    # Log slow requests (>1s) at WARNING level for monitoring
    path = request.url.path
    if duration_ms > 1000:
        logger.warning(
            "[SLOW] %s %s %.0fms status=%d",
            request.method,
            path,
            duration_ms,
            response.status_code,
        )
    elif response.status_code >= 500:
        logger.error(
            "[ERROR] %s %s %.0fms status=%d",
            request.method,
            path,
            duration_ms,
            response.status_code,
        )
    elif response.status_code >= 400:
        logger.info(
            "[CLIENT_ERROR] %s %s %.0fms status=%d",
            request.method,
            path,
            duration_ms,
            response.status_code,
        )

    return response


# Settings are read from the environment once per container
_settings = None


def reset_services():
    """Drop cached settings so the next request re-reads the environment."""
    global _settings
    _settings = None


def get_settings() -> HelpdeskSettings:
    """Get or create the helpdesk settings (lazy init for SnapStart)."""
    global _settings
    if _settings is None:
        _settings = HelpdeskSettings.from_env()
    return _settings


def get_feedback_service(
    settings: Annotated[HelpdeskSettings, Depends(get_settings)],
) -> FeedbackService:
    """Build the feedback service for one request."""
    return FeedbackService(HelpdeskService(settings), settings.department_id)


# MARK: - Health Check


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": "1.0.0",
    }


# MARK: - Feedback Endpoint


@app.post(TICKET_PATH)
async def create_ticket(
    request: Request,
    feedback_service: Annotated[FeedbackService, Depends(get_feedback_service)],
):
    """Validate a feedback submission and file it as a helpdesk ticket."""
    outcome = parse_submission(await request.body())
    if isinstance(outcome, ValidationFailure):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=outcome.to_response()
        )

    record = await run_in_threadpool(feedback_service.submit, outcome)

    return {
        "status": status.HTTP_200_OK,
        "message": "Feedback Submitted Successfully",
        "data": record.to_response(),
    }


# MARK: - Error Handlers


@app.exception_handler(HelpdeskError)
async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
    """Surface token and ticketing failures with the upstream status and body."""
    logger.error(
        "Helpdesk call failed: %s status=%s payload=%s",
        exc,
        exc.status_code,
        exc.payload,
    )
    return JSONResponse(
        status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": exc.payload},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Handle routing errors, reporting wrong verbs in the intake error shape."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Method not allowed"},
            headers=exc.headers,
        )
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers
    )


# MARK: - Lambda Handler

# Create the Lambda handler
api_handler = Mangum(app, lifespan="off")


# For local development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
