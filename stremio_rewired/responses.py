"""HTTP response composition: JSON bodies, CORS and Cache-Control headers."""

from typing import Any, Dict, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from .types import Payload


def cors_headers() -> Dict[str, str]:
    # Stremio Web and Desktop both fetch addons cross-origin.
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def cache_control(hints: Mapping[str, Any]) -> Optional[str]:
    """
    Build a Cache-Control value from the payload cache hints.

    Directives keep the order max-age, stale-while-revalidate, stale-if-error
    and are only emitted for hints that are present.
    """
    directives = []
    if hints.get("cacheMaxAge") is not None:
        directives.append(f"max-age={hints['cacheMaxAge']}")
    if hints.get("staleRevalidate") is not None:
        directives.append(f"stale-while-revalidate={hints['staleRevalidate']}")
    if hints.get("staleError") is not None:
        directives.append(f"stale-if-error={hints['staleError']}")
    return ", ".join(directives) or None


def _dump_model(model: BaseModel) -> Any:
    return jsonable_encoder(model.model_dump(mode="json", exclude_none=True))


def to_content(payload: Payload) -> Any:
    # Unset optional fields of models are left out; plain dicts are kept as given.
    return jsonable_encoder(payload, custom_encoder={BaseModel: _dump_model})


def json_response(payload: Payload) -> JSONResponse:
    content = to_content(payload)
    headers = cors_headers()
    if isinstance(content, Mapping):
        value = cache_control(content)
        if value:
            headers["Cache-Control"] = value
    return JSONResponse(content=content, headers=headers)


def preflight_response() -> Response:
    return Response(status_code=204, headers=cors_headers())


def bad_request() -> PlainTextResponse:
    return PlainTextResponse("Bad request", status_code=400)


def not_found() -> PlainTextResponse:
    return PlainTextResponse("Not found", status_code=404)
