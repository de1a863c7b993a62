"""
Request dispatcher.

``AddonHandler`` turns a FastAPI/starlette ``Request`` into a ``Response`` or
returns None when the path is outside the protocol grammar. The host layer
(see ``stremio_rewired.server``) maps None to a 404. Exceptions raised by
request handlers are not caught here: they reach the host, which answers 500.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from fastapi import Request
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError

from . import responses
from .errors import ManifestError
from .extras import (
    CONFIG_PARAM,
    decode_config,
    parse_catalog_extra,
    parse_query_string,
    parse_subtitles_extra,
)
from .router import Route, classify
from .types import (
    AddonCatalogHandler,
    CatalogHandler,
    Manifest,
    MetaHandler,
    StreamHandler,
    SubtitlesHandler,
)

DEFAULT_LOGGER_NAME = "stremio-rewired"

# Handler slot for each resource kind, and the sentence used when it is missing.
HANDLER_SLOTS = {
    "stream": ("on_stream_request", "streams"),
    "catalog": ("on_catalog_request", "catalogs"),
    "meta": ("on_meta_request", "metadata"),
    "subtitles": ("on_subtitles_request", "subtitles"),
    "addon_catalog": ("on_addon_catalog_request", "addon catalogs"),
}


@dataclass(frozen=True)
class HandlerTable:
    on_stream_request: Optional[StreamHandler] = None
    on_catalog_request: Optional[CatalogHandler] = None
    on_meta_request: Optional[MetaHandler] = None
    on_subtitles_request: Optional[SubtitlesHandler] = None
    on_addon_catalog_request: Optional[AddonCatalogHandler] = None

    def get(self, kind: str):
        return getattr(self, HANDLER_SLOTS[kind][0])


def raw_path(request: Request) -> str:
    """The request path before percent-decoding."""
    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


class AddonHandler:
    def __init__(self, manifest: Manifest, handlers: HandlerTable, logger: logging.Logger):
        self.manifest = manifest
        self.handlers = handlers
        self.logger = logger

    async def __call__(self, request: Request) -> Optional[Response]:
        pathname = raw_path(request)
        self.logger.info(f"Pathname: {pathname}")

        if request.method == "OPTIONS":
            return responses.preflight_response()

        route = classify(pathname)
        if route is None:
            return None

        if route.kind == "manifest":
            return responses.json_response(self.manifest.to_json())

        self.logger.info(f"Handling {route.kind} request for {pathname}")

        rejection = self.validate(route)
        if rejection is not None:
            return rejection

        config = decode_config(request.query_params.get(CONFIG_PARAM))
        handler = self.handlers.get(route.kind)

        if route.kind == "catalog":
            extra_args = self._catalog_args(route, request)
            self.logger.info(
                f"Requesting catalog for type: {route.type} id: {route.id} extra: {extra_args}"
            )
            payload = await handler(route.type, route.id, extra_args, config)
        elif route.kind == "subtitles":
            extra_args = self._subtitles_args(route, request)
            self.logger.info(f"Requesting subtitles for {route.type} {route.id}")
            payload = await handler(route.type, route.id, extra_args, config)
        else:
            self.logger.info(f"Requesting {route.kind} for {route.type} {route.id}")
            payload = await handler(route.type, route.id, config)

        if route.kind == "meta" and _is_empty_meta(payload):
            self.logger.info(f"No meta found for {route.type} {route.id}")
            return responses.not_found()

        return responses.json_response(payload)

    def validate(self, route: Route) -> Optional[Response]:
        """
        Gate a classified route against the manifest and the handler table.

        Checks run in order and the first failure wins: path shape (400),
        declared type, declared resource, declared catalog, handler present
        (all 404).
        """
        if not route.type or not route.id:
            return responses.bad_request()

        if route.type not in self.manifest.types:
            self.logger.info(f"Type '{route.type}' is not declared in manifest.types")
            return responses.not_found()

        resource = self.manifest.resource(route.kind)
        if resource is None or not resource.accepts(route.type, route.id):
            self.logger.info(
                f"Resource '{route.kind}' is not declared in manifest.resources "
                f"for {route.type} {route.id}"
            )
            return responses.not_found()

        if route.kind == "catalog" and not self.manifest.has_catalog(route.id):
            self.logger.info(f"Catalog '{route.id}' is not declared in manifest.catalogs")
            return responses.not_found()

        if route.kind == "addon_catalog" and not self.manifest.has_addon_catalog(route.type, route.id):
            self.logger.info(
                f"Addon catalog '{route.type}/{route.id}' is not declared in manifest.addonCatalogs"
            )
            return responses.not_found()

        if self.handlers.get(route.kind) is None:
            slot, what = HANDLER_SLOTS[route.kind]
            self.logger.warning(
                f"Your manifest says it provides {what} ('{route.kind}' in 'manifest.resources'), "
                f"but you didn't provide a {slot} handler. Either remove '{route.kind}' from "
                f"'manifest.resources' or provide a {slot} handler."
            )
            return responses.not_found()

        return None

    def _catalog_args(self, route: Route, request: Request):
        if route.extra:
            return parse_catalog_extra(route.extra)
        query = "&".join(
            pair for pair in request.url.query.split("&")
            if pair.partition("=")[0] != CONFIG_PARAM
        )
        return parse_catalog_extra(query) or None

    def _subtitles_args(self, route: Route, request: Request):
        params = parse_query_string(route.extra) if route.extra else {}
        params.update(request.query_params)
        return parse_subtitles_extra(params) or None


def _is_empty_meta(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, BaseModel):
        return getattr(payload, "meta", None) is None
    if isinstance(payload, Mapping):
        return payload.get("meta") is None
    return False


def create_handler(
    manifest: Union[Manifest, Dict[str, Any]],
    on_stream_request: Optional[StreamHandler] = None,
    on_catalog_request: Optional[CatalogHandler] = None,
    on_meta_request: Optional[MetaHandler] = None,
    on_subtitles_request: Optional[SubtitlesHandler] = None,
    on_addon_catalog_request: Optional[AddonCatalogHandler] = None,
    logger: Optional[logging.Logger] = None,
    log_level: Optional[Union[int, str]] = None,
) -> AddonHandler:
    """
    Build an addon request handler.

    ``manifest`` may be a ``Manifest`` or a plain dict; a dict is validated
    and ``ManifestError`` is raised when it does not describe a manifest.
    Every handler is optional. A resource whose handler is missing answers
    404 even if the manifest declares it.
    """
    if not isinstance(manifest, Manifest):
        try:
            manifest = Manifest.model_validate(manifest)
        except ValidationError as e:
            raise ManifestError(f"Invalid manifest: {e}") from e

    if logger is None:
        logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    if log_level is not None:
        logger.setLevel(log_level)

    handlers = HandlerTable(
        on_stream_request=on_stream_request,
        on_catalog_request=on_catalog_request,
        on_meta_request=on_meta_request,
        on_subtitles_request=on_subtitles_request,
        on_addon_catalog_request=on_addon_catalog_request,
    )
    return AddonHandler(manifest, handlers, logger)
