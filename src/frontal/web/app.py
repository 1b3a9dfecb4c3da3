"""FastAPI application factory for the FrontAl analysis API."""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from frontal import __version__
from frontal.config import FrontalConfig


def create_app(
    config: FrontalConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    ``transport`` is handed to every outbound httpx client, which lets tests
    answer audit and page requests without a network.
    """
    config = config or FrontalConfig.load()

    app = FastAPI(
        title="FrontAl",
        version=__version__,
        docs_url="/api/docs",
    )

    app.state.config = config
    app.state.transport = transport

    from frontal.web.api.analysis import router as analysis_router

    app.include_router(analysis_router, prefix="/api")

    return app
