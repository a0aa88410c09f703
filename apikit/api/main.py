from __future__ import annotations

"""
Reference FastAPI application for serving APIEndpoint routes.

Design intent:
- Keep the application thin: routing, CORS and health only.
- Mount each APIEndpoint as a plain Starlette route so the envelope adapter owns the response.
"""

import logging
from typing import Iterable, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apikit.internal_core.config import APIKitConfig, load_config
from apikit.server import APIEndpoint

EndpointRoute = tuple[str, APIEndpoint, Sequence[str]]

logger = logging.getLogger(__name__)


def mount_endpoint(app: FastAPI, path: str, endpoint: APIEndpoint, methods: Sequence[str] = ("GET",)) -> None:
    app.add_route(path, endpoint.handle, methods=[method.upper() for method in methods])
    logger.debug("mounted endpoint name=%s path=%s methods=%s", endpoint.name, path, list(methods))


def create_app(
    endpoints: Iterable[EndpointRoute] | None = None,
    config: APIKitConfig | None = None,
) -> FastAPI:
    config = config if config is not None else load_config()
    logging.getLogger("apikit").setLevel(config.APIKIT_LOG_LEVEL)

    app = FastAPI(title="apikit endpoint service")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    for path, endpoint, methods in endpoints or ():
        mount_endpoint(app, path, endpoint, methods)

    return app
