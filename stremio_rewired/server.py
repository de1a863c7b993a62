"""FastAPI host layer for an AddonHandler."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response

from . import responses
from .handler import AddonHandler


def mount_addon(app: FastAPI, handler: AddonHandler) -> FastAPI:
    """
    Route every GET/OPTIONS request not claimed by an earlier route to ``handler``.

    Register application routes (configure pages and the like) before calling
    this; the catch-all shadows anything added afterwards. Paths outside the
    protocol grammar answer 404. Exceptions raised by request handlers are left
    to FastAPI, which turns them into a 500.
    """

    @app.api_route("/{path:path}", methods=["GET", "OPTIONS"], include_in_schema=False)
    async def addon(request: Request) -> Response:
        response = await handler(request)
        if response is None:
            return responses.not_found()
        return response

    return app


def create_app(handler: AddonHandler, title: Optional[str] = None) -> FastAPI:
    manifest = handler.manifest
    app = FastAPI(title=title or manifest.name, version=manifest.version)
    return mount_addon(app, handler)
