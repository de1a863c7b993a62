import logging
from contextlib import asynccontextmanager
from pathlib import Path

from curl_cffi.requests import AsyncSession
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

# Import interni
from stremio_rewired import create_handler, launch, mount_addon
from stremio_rewired.settings import get_settings, setup_logging
from unity_addon.extractors import PROVIDER, ProviderError
from unity_addon.manifest import MANIFEST
from unity_addon.utils import strip_prefix

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger("unity-addon")

# Cache di 1 ora sugli stream, evita richieste doppie immediate da Stremio
STREAM_CACHE_MAX_AGE = 3600
DUB_MARKER = "(ITA)"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def new_session():
    # 'chrome110' per simulare un browser reale e bypassare i controlli
    return AsyncSession(impersonate="chrome110")


def wants_dub(config) -> bool:
    if not config:
        return False
    return config.get("dub") in (True, "true", "on", "checked")


# --- HANDLERS ---

async def on_catalog_request(type, id, extra_args=None, config=None):
    search = (extra_args or {}).get("search")
    if not search:
        return {"metas": []}

    async with new_session() as client:
        try:
            records = await PROVIDER.search(search, client)
        except ProviderError as e:
            logger.error(f"{PROVIDER.get_name()}: {e}")
            return {"metas": []}

    if wants_dub(config):
        records = [r for r in records if DUB_MARKER in r["title"]]

    logger.info(f"Catalogo '{search}': {len(records)} risultati")

    return {
        "metas": [
            {
                "id": record["id"],
                "type": "series",
                "name": record["title"],
                "poster": record["imageUrl"],
            }
            for record in records
        ]
    }


async def on_meta_request(type, id, config=None):
    async with new_session() as client:
        try:
            meta = await PROVIDER.get_meta(strip_prefix(id), client)
        except ProviderError as e:
            logger.warning(f"{PROVIDER.get_name()}: {e}")
            return None

    return {"meta": meta}


async def on_stream_request(type, id, config=None):
    async with new_session() as client:
        try:
            streams = await PROVIDER.get_streams(strip_prefix(id), client)
        except ProviderError as e:
            logger.error(f"{PROVIDER.get_name()}: {e}")
            return {"streams": []}

    logger.info(f"Totale stream trovati: {len(streams)}")
    return {"streams": streams, "cacheMaxAge": STREAM_CACHE_MAX_AGE}


handler = create_handler(
    manifest=MANIFEST,
    on_catalog_request=on_catalog_request,
    on_meta_request=on_meta_request,
    on_stream_request=on_stream_request,
    log_level=settings.log_level,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.open_browser:
        launch(settings.port, settings.staging_url)
    yield


app = FastAPI(title="Unity Addon", version=MANIFEST["version"], lifespan=lifespan)


# --- ENDPOINTS ---

@app.get("/", response_class=HTMLResponse)
@app.get("/configure", response_class=HTMLResponse)
async def configure(request: Request):
    """
    Pagina di configurazione: genera il link di installazione con ?config=.
    """
    return templates.TemplateResponse(
        request,
        "configure.html",
        {"manifest": handler.manifest},
    )


# Il catch-all del protocollo va registrato per ultimo
mount_addon(app, handler)

# Blocco per avvio locale per debug rapido
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("unity_addon.main:app", host=settings.host, port=settings.port, reload=True)
