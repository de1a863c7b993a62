import json
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from fake_headers import Headers
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

User_Agent = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/139.0.0.0 Safari/537.36"


class LiveSearchRecord(BaseModel):
    title_eng: str
    id: int
    imageurl: str
    slug: str


class LiveSearchResult(BaseModel):
    records: List[LiveSearchRecord]


def browser_headers(referer: Optional[str] = None) -> dict:
    """Randomised browser headers with a fixed User-Agent."""
    headers = Headers().generate()
    headers["User-Agent"] = User_Agent
    if referer:
        headers["Referer"] = referer
    return headers


def extract_csrf_token(html: str) -> Optional[str]:
    """<meta name="csrf-token" content="..."> of a Laravel page"""
    soup = BeautifulSoup(html, "lxml")
    tag = soup.find("meta", attrs={"name": "csrf-token"})
    if not tag or not tag.get("content"):
        return None
    return tag["content"]


def parse_video_player(html: str) -> Optional[dict]:
    """
    Decode the JSON carried by <video-player anime="...">.

    BeautifulSoup already resolves the &quot; entities of the attribute.
    """
    soup = BeautifulSoup(html, "lxml")
    player = soup.find("video-player")
    if not player or not player.get("anime"):
        return None
    try:
        return json.loads(player["anime"])
    except ValueError as e:
        logger.error(f"video-player data is not JSON: {e}")
        return None


def parse_search_records(data) -> List[LiveSearchRecord]:
    try:
        return LiveSearchResult.model_validate(data).records
    except ValidationError as e:
        logger.error(f"Search returned invalid data: {e}")
        return []


def strip_prefix(id: str, prefix: str = "au") -> str:
    return re.sub(f"^{re.escape(prefix)}", "", id)
