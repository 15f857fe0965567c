"""Failure taxonomy for provider and endpoint errors."""

from enum import StrEnum


class FailureReason(StrEnum):
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    MALFORMED_UPSTREAM_DATA = "MALFORMED_UPSTREAM_DATA"


class WeatherError(Exception):
    """Base error carrying the HTTP status the proxy should answer with."""

    reason = FailureReason.UPSTREAM_FAILURE
    default_status = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or self.default_status


class InvalidRequest(WeatherError):
    reason = FailureReason.INVALID_REQUEST
    default_status = 400


class NotFound(WeatherError):
    reason = FailureReason.NOT_FOUND
    default_status = 404


class UpstreamFailure(WeatherError):
    reason = FailureReason.UPSTREAM_FAILURE
    default_status = 500


class MalformedUpstreamData(UpstreamFailure):
    reason = FailureReason.MALFORMED_UPSTREAM_DATA
