import logging
import webbrowser
from urllib.parse import quote

logger = logging.getLogger(__name__)

STAGING_URL = "https://staging.strem.io"


def inspector_url(port: int, staging_url: str = STAGING_URL) -> str:
    """URL of the Stremio web app with the local addon opened for inspection."""
    addon_url = f"http://localhost:{port}/manifest.json"
    return f"{staging_url}/#?addonOpen={quote(addon_url, safe='')}"


def launch(port: int, staging_url: str = STAGING_URL) -> str:
    url = inspector_url(port, staging_url)
    logger.info(f"Opening {url}")
    webbrowser.open(url)
    return url
