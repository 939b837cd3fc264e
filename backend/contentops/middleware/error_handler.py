"""Global error handlers rendering RFC 7807 problem details."""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()

_TITLES = {400: "Bad Request", 403: "Forbidden", 404: "Not Found", 500: "Internal Server Error", 503: "Service Unavailable"}


class AppException(Exception):
    def __init__(self, status_code: int, detail: str, error_type: str = "about:blank"):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.error_type = error_type


def _problem(status_code: int, detail: str, error_type: str = "about:blank", instance: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "type": error_type,
            "title": _TITLES.get(status_code, "Error"),
            "status": status_code,
            "detail": detail,
            "instance": instance,
        },
    )


def setup_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        logger.warning("app_exception", status=exc.status_code, detail=exc.detail, path=request.url.path)
        return _problem(exc.status_code, exc.detail, exc.error_type, request.url.path)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return _problem(400, str(exc), instance=request.url.path)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), path=request.url.path, exc_info=True)
        return _problem(500, "An unexpected error occurred.", instance=request.url.path)
