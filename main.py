# 📦 main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from prometheus_client import start_http_server
import structlog
import uvicorn

from api.handlers import match_error_response, request_validation_response, router as api_router
from engine.errors import MatchError
from services.match_state import LatestMatchStore
from services.matcher_service import build_backend
from settings import Settings, get_settings

log = structlog.get_logger()


# ─────────────────────────────
# API Setup
def create_app(settings: Settings | None = None, backend=None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name, version=settings.version)
    app.state.settings = settings
    app.state.backend = backend or build_backend(settings)
    app.state.match_results = LatestMatchStore()
    app.include_router(api_router)

    @app.exception_handler(MatchError)
    async def handle_match_error(request: Request, exc: MatchError):
        return match_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return request_validation_response(exc.errors())

    # ─────────────────────────────
    # Startup event
    @app.on_event("startup")
    async def startup_event():
        if settings.prometheus_port:
            start_http_server(settings.prometheus_port)
            log.info("Prometheus exporter started", port=settings.prometheus_port)
        if not settings.live_backend_available:
            log.warning("Live backend not configured, serving keyword fallback matches", mode=settings.mode)

    return app


app = create_app()

# ─────────────────────────────
# Main entrypoint
if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
    )
