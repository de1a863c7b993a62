import logging
from typing import List

from unity_addon.resolvers import extract_vixcloud_url, resolve_vixcloud
from unity_addon.utils import (
    browser_headers,
    extract_csrf_token,
    parse_search_records,
    parse_video_player,
)

AU_DOMAIN = "https://www.animeunity.so"
logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Il sito ha risposto ma i dati attesi non ci sono."""


class AnimeUnityProvider:
    def get_name(self):
        return "AnimeUnity"

    async def search(self, title: str, client) -> List[dict]:
        """
        Ricerca tramite /livesearch.

        La home imposta i cookie XSRF-TOKEN e animeunity_session nella
        sessione e contiene il csrf token da rimandare negli header.
        """
        home = await client.get(AU_DOMAIN, headers=browser_headers())
        csrf_token = extract_csrf_token(home.text)
        xsrf_token = client.cookies.get("XSRF-TOKEN")

        if not csrf_token or not xsrf_token:
            raise ProviderError("CSRF/XSRF token not found")

        headers = browser_headers(referer=f"{AU_DOMAIN}/")
        headers.update({
            "Content-Type": "application/json",
            "x-csrf-token": csrf_token,
            "x-xsrf-token": xsrf_token,
        })

        response = await client.post(f"{AU_DOMAIN}/livesearch", json={"title": title}, headers=headers)

        try:
            data = response.json()
        except ValueError:
            logger.error("Search returned invalid JSON")
            return []

        return [
            {
                "title": record.title_eng,
                "id": f"au{record.id}-{record.slug}",
                "imageUrl": record.imageurl,
            }
            for record in parse_search_records(data)
        ]

    async def get_streams(self, id: str, client) -> List[dict]:
        response = await client.get(f"{AU_DOMAIN}/anime/{id}", headers=browser_headers())

        embed_url = extract_vixcloud_url(response.text)
        if not embed_url:
            raise ProviderError(f"Streams not found for {id}")

        logger.info(f"AnimeUnity embed: {embed_url}")

        mp4_url = await resolve_vixcloud(embed_url, client)
        if not mp4_url:
            raise ProviderError(f"Mp4 URL not found for {id}")

        return [
            {
                "id": f"au{id}",
                "title": "Stream",
                "url": mp4_url,
            }
        ]

    async def get_meta(self, id: str, client) -> dict:
        response = await client.get(f"{AU_DOMAIN}/anime/{id}", headers=browser_headers())

        anime = parse_video_player(response.text)
        if not anime or "title" not in anime:
            raise ProviderError(f"Meta not found for {id}")

        return {
            "id": f"au{id}",
            "name": anime["title"],
            "type": "series",
        }
