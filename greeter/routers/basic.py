import logging
from typing import cast

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

from greeter.models import ServerConfig

# Convenience.
logit = logging.getLogger("app")


class AnyMethodRoute(APIRoute):
    """Route that matches on the path alone and accepts every HTTP method.

    This includes methods like TRACE or PURGE that FastAPI would otherwise
    answer with 405.
    """

    def matches(self, scope: Scope):
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)


def get_config(request: Request) -> ServerConfig:
    """FastAPI dependency to extract the server config."""
    return cast(ServerConfig, request.app.extra["config"])


def greeting(cfg: ServerConfig) -> str:
    return f"Hello from {cfg.environment} (version {cfg.version}): {cfg.message}\n"


# ----------------------------------------------------------------------
# Basic Routes.
# ----------------------------------------------------------------------


@router.api_route("/healthz", methods=["GET"])
def get_healthz() -> PlainTextResponse:
    """Health check endpoint. Always returns 200."""
    return PlainTextResponse(status_code=status.HTTP_200_OK, content="ok")


@router.api_route("/", methods=["GET"])
def get_greeting(cfg: ServerConfig = Depends(get_config)) -> PlainTextResponse:
    return PlainTextResponse(status_code=status.HTTP_200_OK, content=greeting(cfg))
