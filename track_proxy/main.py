# track_proxy/main.py
import logging
import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# === Import Routers ===
from track_proxy.api.health import router as health_router
from track_proxy.api.track_api import router as track_router
from track_proxy.config import settings
from track_proxy.services.errors import RateLimitError, TrackProxyError
from track_proxy.services.spotify_search_service import SpotifySearchClient
from track_proxy.services.spotify_token_service import CredentialBroker

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /search-by-code?code=CODE",
    "GET /search?query=QUERY",
]


def _error_body(error: str, message: str, details=None, environment: str = None, **extra):
    body = {"error": error, "message": message}
    body.update(extra)
    if details is not None and settings.is_development(environment):
        body["details"] = details
    return body


def create_app(broker: CredentialBroker = None, environment: str = None) -> FastAPI:
    environment = environment or settings.ENVIRONMENT
    broker = broker or CredentialBroker()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        missing = settings.missing_credentials(broker.client_id or "", broker.client_secret or "")
        if missing:
            logger.error(f"{' and '.join(missing)} must be set (see https://developer.spotify.com/dashboard)")
            raise RuntimeError(f"Missing Spotify credentials: {', '.join(missing)}")

        logger.info("=" * 60)
        logger.info("ISRC Spotify API Server")
        logger.info(f"Server running on port {settings.PORT}, environment: {environment}")
        for endpoint in AVAILABLE_ENDPOINTS:
            logger.info(f"   {endpoint}")
        logger.info("=" * 60)
        yield

    app = FastAPI(
        title="ISRC Spotify Backend",
        description=(
            "Backend for: "
            "• ISRC lookup "
            "• Track text search "
            "• Spotify Client Credentials token caching"
        ),
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.environment = environment
    app.state.broker = broker
    app.state.search_client = SpotifySearchClient(broker)

    # === CORS Middleware ===
    if settings.is_development(environment):
        # 開發模式允許所有來源
        origins, origin_regex = ["*"], None
    else:
        origins, origin_regex = settings.ALLOWED_ORIGINS, settings.ALLOWED_ORIGIN_REGEX
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Request logging ===
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    # === Error handling ===
    @app.exception_handler(TrackProxyError)
    async def track_proxy_error_handler(request: Request, exc: TrackProxyError):
        if exc.status_code >= 500:
            logger.error(f"Error in {request.url.path}: {exc.message} ({exc.detail})")

        headers = None
        if isinstance(exc, RateLimitError) and exc.retry_after:
            headers = {"Retry-After": exc.retry_after}

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error, exc.message, exc.detail, environment, **exc.extra),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # 沒有對應的 method + path 一律當成 404
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content=_error_body(
                    "Endpoint not found",
                    f"The endpoint {request.method} {request.url.path} does not exist",
                    availableEndpoints=AVAILABLE_ENDPOINTS,
                ),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error in {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal server error",
                "An unexpected error occurred",
                "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
                environment,
            ),
        )

    # === Routes ===
    app.include_router(health_router, tags=["Health"])
    app.include_router(track_router, tags=["Tracks"])

    return app


app = create_app()


def run():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
