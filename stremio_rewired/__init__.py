"""Stremio addon protocol request dispatcher."""

from .errors import ManifestError, StremioRewiredError
from .handler import AddonHandler, HandlerTable, create_handler
from .launch import launch
from .server import create_app, mount_addon
from .types import (
    AddonCatalogItem,
    AddonCatalogResponse,
    CatalogExtraArgs,
    CatalogItem,
    CatalogResponse,
    ConfigValues,
    ContentType,
    Manifest,
    Meta,
    MetaResponse,
    Stream,
    StreamResponse,
    Subtitle,
    SubtitlesExtraArgs,
    SubtitlesResponse,
    Video,
)

__version__ = "0.1.0"

__all__ = [
    "AddonCatalogItem",
    "AddonCatalogResponse",
    "AddonHandler",
    "CatalogExtraArgs",
    "CatalogItem",
    "CatalogResponse",
    "ConfigValues",
    "ContentType",
    "HandlerTable",
    "Manifest",
    "ManifestError",
    "Meta",
    "MetaResponse",
    "Stream",
    "StreamResponse",
    "StremioRewiredError",
    "Subtitle",
    "SubtitlesExtraArgs",
    "SubtitlesResponse",
    "Video",
    "create_app",
    "create_handler",
    "launch",
    "mount_addon",
]
