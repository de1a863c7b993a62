"""Path classification for the addon protocol URL grammar."""

from typing import NamedTuple, Optional
from urllib.parse import unquote

MANIFEST_PATH = "/manifest.json"
JSON_SUFFIX = ".json"


class RoutePattern(NamedTuple):
    kind: str
    allows_extra: bool


# Evaluated in order; the first pattern whose resource segment matches wins.
ROUTE_TABLE = (
    RoutePattern("stream", False),
    RoutePattern("meta", False),
    RoutePattern("catalog", True),
    RoutePattern("subtitles", True),
    RoutePattern("addon_catalog", True),
)


class Route(NamedTuple):
    kind: str
    type: str = ""
    id: str = ""
    extra: Optional[str] = None


def strip_json(segment: str) -> str:
    if segment.endswith(JSON_SUFFIX):
        return segment[: -len(JSON_SUFFIX)]
    return segment


def classify(path: str) -> Optional[Route]:
    """
    Classify a raw (still percent-encoded) URL path.

    Returns None for anything outside the protocol grammar. The resource id is
    stripped of its ``.json`` suffix and percent-decoded here, once.
    """
    if path == MANIFEST_PATH:
        return Route("manifest")

    if not path.startswith("/") or not path.endswith(JSON_SUFFIX):
        return None

    segments = path[1:].split("/")
    for pattern in ROUTE_TABLE:
        if segments[0] != pattern.kind:
            continue

        if len(segments) == 3:
            type, raw_id = segments[1], strip_json(segments[2])
            return Route(pattern.kind, unquote(type), unquote(raw_id))

        if len(segments) == 4 and pattern.allows_extra:
            type, raw_id, extra = segments[1], segments[2], strip_json(segments[3])
            return Route(pattern.kind, unquote(type), unquote(raw_id), extra or None)

        return None

    return None
