"""Weather proxy: FastAPI application factory."""

import logging
import os
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from skyboard.config.loader import load_config
from skyboard.config.schema import AppConfig
from skyboard.ingest.adapter import WeatherAdapter
from skyboard.ingest.weatherapi_client import WeatherApiClient
from skyboard.models.errors import WeatherError
from skyboard.server import routes
from skyboard.server.middleware import install_security_headers

logger = logging.getLogger(__name__)

CONFIG_ENV = "SKYBOARD_CONFIG"
DEFAULT_CONFIG = "config/default.yaml"


def build_adapter(config: AppConfig) -> WeatherAdapter:
    provider = config.provider
    client = WeatherApiClient(
        api_key=provider.api_key.get_secret_value(),
        base_url=provider.base_url,
        timeout=provider.timeout_seconds,
        max_retries=provider.max_retries,
        retry_base_delay=provider.retry_base_delay,
    )
    return WeatherAdapter(
        client,
        forecast_days=provider.forecast_days,
        hourly_window=provider.hourly_window,
    )


def create_app(
    config: AppConfig | None = None, adapter: WeatherAdapter | None = None
) -> FastAPI:
    if config is None:
        config = load_config(os.getenv(CONFIG_ENV, DEFAULT_CONFIG))
    if adapter is None:
        adapter = build_adapter(config)
    if not config.provider.has_api_key:
        logger.warning(
            "WEATHERAPI_KEY is not set; weather lookups will fail and "
            "favorite cities will be served from mock data"
        )

    app = FastAPI(title="Skyboard Weather Proxy", version="0.1.0")
    app.state.config = config
    app.state.adapter = adapter
    app.state.started_at = time.monotonic()

    install_security_headers(app, config.is_production)
    _install_error_handlers(app)

    app.include_router(routes.router)

    @app.get("/health")
    def health():
        """Liveness probe for monitoring."""
        return {
            "uptime": round(time.monotonic() - app.state.started_at, 3),
            "message": "OK",
            "timestamp": int(time.time() * 1000),
            "environment": config.server.environment.value,
        }

    static_dir = Path(config.server.static_dir)
    if config.is_production:
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning("Static directory %s not found, serving API only", static_dir)
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )
    return app


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(WeatherError)
    async def weather_error(request: Request, exc: WeatherError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(p) for p in err.get('loc', ())[1:]) or 'request'}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400, content={"message": "Invalid request: " + "; ".join(problems)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
