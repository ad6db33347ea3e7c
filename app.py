"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.handlers import handle_health, handle_proxy_get, handle_proxy_post, handle_root
from api.responses import internal_error
from core.allowlist import AllowList, DomainValidator
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.forwarder import Forwarder


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the network transport of the upstream client.
    """
    allow_list = AllowList.of(config.allowed_domains)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = httpx.AsyncClient(
            timeout=config.forward.timeout,
            follow_redirects=False,
            transport=transport,
        )
        app.state.validator = DomainValidator(allow_list, logger)
        app.state.forwarder = Forwarder(
            client,
            HeaderBuilder(config.forward.user_agent),
            logger,
            timeout=config.forward.timeout,
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Render Proxy", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.log_error(f"{request.method} {request.url.path}", 500, str(exc))
        return internal_error(str(exc))

    @app.get("/health")
    async def health():
        return handle_health()

    @app.get("/")
    async def root():
        return handle_root()

    @app.get("/proxy")
    async def proxy_get(request: Request):
        return await handle_proxy_get(request)

    @app.post("/proxy")
    async def proxy_post(request: Request):
        return await handle_proxy_post(request, config)

    return app
