import re
import logging
from typing import Optional

from unity_addon.utils import browser_headers

logger = logging.getLogger(__name__)

VIXCLOUD_EMBED = re.compile(r"https://vixcloud\.co/embed/[^\s\"'<>]+")
DOWNLOAD_URL = re.compile(r"window\.downloadUrl\s*=\s*'([^']+)'")


def extract_vixcloud_url(html: str) -> Optional[str]:
    """First VixCloud embed URL found in an AnimeUnity page"""
    match = VIXCLOUD_EMBED.search(html)
    if not match:
        return None
    return match.group(0).replace("&amp;", "&")


def extract_download_url(html: str) -> Optional[str]:
    match = DOWNLOAD_URL.search(html)
    if match:
        return match.group(1)
    return None


async def resolve_vixcloud(url: str, client) -> Optional[str]:
    """Risolve link VixCloud nel link mp4 diretto"""
    response = await client.get(url, headers=browser_headers(referer="https://www.animeunity.so/"))
    if response.status_code != 200:
        logger.warning(f"VixCloud error: HTTP {response.status_code} on {url}")
        return None

    download_url = extract_download_url(response.text)
    if not download_url:
        logger.warning(f"VixCloud: downloadUrl not found on {url}")
    return download_url
