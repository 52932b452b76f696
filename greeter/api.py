import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional, Tuple

from fastapi import FastAPI
from hypercorn.asyncio import serve as hypercorn_serve
from hypercorn.config import Config

import greeter.routers.basic as basic
from greeter.models import ServerConfig

# Convenience.
logit = logging.getLogger("app")


# ----------------------------------------------------------------------
# Setup Server.
# ----------------------------------------------------------------------
def compile_server_config() -> Tuple[ServerConfig, bool]:
    """Return the server configuration based on environment variables.

    Unset and empty variables both fall back to their defaults.
    """
    get = os.environ.get
    try:
        cfg = ServerConfig(
            environment=get("ENV") or "local",
            version=get("VERSION") or "0.0.0",
            message=get("APP_MESSAGE") or "Hello World",
            loglevel=get("LOGLEVEL") or "info",
            host=get("HOST") or "0.0.0.0",
            port=int(get("PORT") or "8080"),
        )
        return cfg, False
    except ValueError as e:
        logit.error("invalid environment variables", {"reason": str(e)})
        return ServerConfig(), True


@asynccontextmanager
async def lifespan(_: FastAPI):
    logit.info("server startup complete")
    yield
    logit.info("server shutdown complete")


def make_app(cfg: Optional[ServerConfig] = None) -> FastAPI:
    """Return a fully configured FastAPI instance.

    Compile the configuration from the environment unless `cfg` was supplied.
    """
    if cfg is None:
        cfg, err = compile_server_config()
        if err:
            raise RuntimeError("could not meet preconditions to start server")

    # Only the explicitly defined paths must match, hence no trailing slash
    # redirects and no documentation endpoints.
    app = FastAPI(
        title="Greeter",
        summary="",
        description="",
        version="0.1.0",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.extra["config"] = cfg

    # Install the web server routes.
    app.include_router(basic.router, prefix="", tags=["Basic"])
    return app


def make_hypercorn_config(cfg: ServerConfig) -> Config:
    """Return the hypercorn config to serve the app on `cfg.host:cfg.port`.

    IPv6 literals like `::` are put in brackets. Hypercorn logs through the
    loggers that `greeter.logstreams.setup` configured.
    """
    host = f"[{cfg.host}]" if ":" in cfg.host else cfg.host

    hypercorn_cfg = Config()
    hypercorn_cfg.bind = [f"{host}:{cfg.port}"]
    hypercorn_cfg.errorlog = logging.getLogger("hypercorn.error")
    hypercorn_cfg.accesslog = logging.getLogger("hypercorn.access")
    return hypercorn_cfg


async def serve(
    cfg: ServerConfig,
    shutdown_trigger: Optional[Callable[..., Awaitable]] = None,
) -> None:
    """Serve the app on the configured address until `shutdown_trigger` fires.

    Raises `OSError` if the address cannot be bound.
    """
    hypercorn_cfg = make_hypercorn_config(cfg)
    logit.info(f"Starting server on :{cfg.port}...")
    await hypercorn_serve(
        make_app(cfg),  # type: ignore
        hypercorn_cfg,
        shutdown_trigger=shutdown_trigger,  # type: ignore
    )


def start_server(cfg: ServerConfig) -> bool:
    """Block and serve requests. Return `True` if the server could not start."""
    try:
        asyncio.run(serve(cfg))
    except OSError as err:
        logit.error(
            "cannot bind address",
            {"host": cfg.host, "port": cfg.port, "reason": str(err)},
        )
        return True
    return False
