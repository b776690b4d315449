import logging
from contextlib import asynccontextmanager
from typing import List

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .github import GitHubClient, build_http_client
from .routes import api_router
from .session import BrowserSession

logger = logging.getLogger("repobrowser.api")


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        github_http = build_http_client(transport)
        app.state.session = BrowserSession(GitHubClient(github_http, settings))
        logger.info("Browser session ready (GitHub API at %s)", settings.github_api_base_url)
        try:
            yield
        finally:
            await github_http.aclose()

    app = FastAPI(title="Repo Browser", version="0.1.0", lifespan=lifespan)

    origins: List[str] = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    allow_credentials = True
    if not origins or "*" in origins:
        allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run("repobrowser.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
