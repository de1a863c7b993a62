"""Decoding of catalog/subtitles extra arguments and user configuration."""

import json
import logging
import re
from typing import Dict, Optional
from urllib.parse import unquote

from .types import CatalogExtraArgs, ConfigValues, SubtitlesExtraArgs

logger = logging.getLogger(__name__)

CATALOG_KEYS = ("search", "genre", "skip")
CONFIG_PARAM = "config"

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(value: str) -> Optional[int]:
    """Base-10 integer prefix of ``value`` (``"12abc"`` -> 12), or None."""
    match = _INT_PREFIX.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_query_string(query: str) -> Dict[str, str]:
    """Split ``a=1&b=2`` into a dict, dropping pairs with an empty key or value."""
    params = {}
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        if not key or not value:
            continue
        try:
            params[unquote(key, errors="strict")] = unquote(value, errors="strict")
        except UnicodeDecodeError:
            continue
    return params


def parse_catalog_extra(extra: str) -> CatalogExtraArgs:
    """
    Decode a catalog extra segment such as ``search=foo&genre=Action&skip=20``.

    ``search`` and ``genre`` stay strings, ``skip`` becomes an int and is
    dropped when it does not parse. Any other key passes through as a string.
    """
    params = parse_query_string(extra)
    args: CatalogExtraArgs = {}

    if params.get("search"):
        args["search"] = params["search"]
    if params.get("genre"):
        args["genre"] = params["genre"]
    if params.get("skip"):
        skip = parse_int(params["skip"])
        if skip is not None:
            args["skip"] = skip

    for key, value in params.items():
        if key not in CATALOG_KEYS:
            args[key] = value

    return args


def parse_subtitles_extra(params: Dict[str, str]) -> SubtitlesExtraArgs:
    args: SubtitlesExtraArgs = {}
    video_id = params.get("videoId")
    video_size = params.get("videoSize")
    if video_id:
        args["videoId"] = video_id
    if video_size:
        size = parse_int(video_size)
        if size is not None:
            args["videoSize"] = size
    return args


def decode_config(raw: Optional[str]) -> Optional[ConfigValues]:
    """
    Decode the ``config`` query parameter into a dict.

    ``raw`` has already been unquoted once by the query parser; a second
    unquote is attempted for clients that double-encode. Anything that is not
    a JSON object decodes to None.
    """
    if not raw:
        return None

    for candidate in (raw, unquote(raw)):
        try:
            value = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(value, dict):
            return value
        break

    logger.debug(f"Ignoring undecodable config: {raw!r}")
    return None
