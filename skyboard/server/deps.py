from fastapi import HTTPException, Request

from skyboard.config.schema import AppConfig
from skyboard.ingest.adapter import WeatherAdapter


def get_adapter(request: Request) -> WeatherAdapter:
    adapter = getattr(request.app.state, "adapter", None)
    if adapter is None:
        raise HTTPException(status_code=500, detail="Weather adapter not configured")
    return adapter


def get_config(request: Request) -> AppConfig:
    return request.app.state.config
