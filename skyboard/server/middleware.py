"""Response security headers."""

from fastapi import FastAPI, Request

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "no-referrer-when-downgrade",
}

PRODUCTION_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' https://cdn.weatherapi.com data:; "
        "font-src 'self'; "
        "connect-src 'self' https://api.weatherapi.com;"
    ),
}


def security_headers(production: bool) -> dict[str, str]:
    if production:
        return {**BASE_HEADERS, **PRODUCTION_HEADERS}
    return dict(BASE_HEADERS)


def install_security_headers(app: FastAPI, production: bool) -> None:
    headers = security_headers(production)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response
