"""Protocol models: manifest, resource payloads and request argument bags."""

from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# movie, series, channel and tv are the common ones; addons may declare others.
ContentType = str

ConfigValues = Dict[str, Union[str, int, float, bool]]
CatalogExtraArgs = Dict[str, Union[str, int]]
SubtitlesExtraArgs = Dict[str, Union[str, int]]


class _Model(BaseModel):
    # Unknown protocol fields are kept so the manifest round-trips untouched.
    model_config = ConfigDict(extra="allow", frozen=True)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class CatalogExtraProperty(_Model):
    name: str
    isRequired: Optional[bool] = None
    options: Optional[List[str]] = None
    optionsLimit: Optional[int] = None


class CatalogDefinition(_Model):
    id: str
    type: ContentType
    name: str
    extra: Optional[List[CatalogExtraProperty]] = None


class AddonCatalogDefinition(_Model):
    type: ContentType
    id: str
    name: str


class ResourceDefinition(_Model):
    name: str
    types: Optional[List[ContentType]] = None
    idPrefixes: Optional[List[str]] = None

    def accepts(self, type: str, id: str) -> bool:
        """Check the optional type / id-prefix constraints of the declaration."""
        if self.types is not None and type not in self.types:
            return False
        if self.idPrefixes is not None and not any(id.startswith(p) for p in self.idPrefixes):
            return False
        return True


class ManifestBehaviorHints(_Model):
    adult: Optional[bool] = None
    p2p: Optional[bool] = None
    configurable: Optional[bool] = None
    configurationRequired: Optional[bool] = None


class ConfigField(_Model):
    key: str
    type: Literal["text", "number", "password", "checkbox", "select"]
    default: Optional[str] = None
    title: Optional[str] = None
    options: Optional[List[str]] = None
    required: Optional[bool] = None


class Manifest(_Model):
    id: str
    version: str
    name: str
    description: str
    types: List[ContentType]
    catalogs: List[Union[str, CatalogDefinition]] = Field(default_factory=list)
    resources: List[Union[str, ResourceDefinition]]
    idPrefixes: Optional[List[str]] = None
    behaviorHints: Optional[ManifestBehaviorHints] = None
    config: Optional[List[ConfigField]] = None
    background: Optional[str] = None
    logo: Optional[str] = None
    contactEmail: Optional[str] = None
    addonCatalogs: Optional[List[AddonCatalogDefinition]] = None

    def resource(self, name: str) -> Optional[ResourceDefinition]:
        """Return the declaration for ``name``; bare names carry no constraints."""
        for entry in self.resources:
            if isinstance(entry, str):
                if entry == name:
                    return ResourceDefinition(name=entry)
            elif entry.name == name:
                return entry
        return None

    def has_catalog(self, id: str) -> bool:
        return any(
            (entry if isinstance(entry, str) else entry.id) == id
            for entry in self.catalogs
        )

    def has_addon_catalog(self, type: str, id: str) -> bool:
        return any(c.id == id and c.type == type for c in self.addonCatalogs or [])

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Payload items
# ---------------------------------------------------------------------------

class Subtitle(_Model):
    id: str
    url: str
    lang: str


class ProxyHeaders(_Model):
    request: Optional[Dict[str, str]] = None
    response: Optional[Dict[str, str]] = None


class StreamBehaviorHints(_Model):
    countryWhitelist: Optional[List[str]] = None
    notWebReady: Optional[bool] = None
    bingeGroup: Optional[str] = None
    proxyHeaders: Optional[ProxyHeaders] = None
    videoHash: Optional[str] = None
    videoSize: Optional[int] = None
    filename: Optional[str] = None


class Stream(_Model):
    url: Optional[str] = None
    ytId: Optional[str] = None
    infoHash: Optional[str] = None
    fileIdx: Optional[int] = None
    externalUrl: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    subtitles: Optional[List[Subtitle]] = None
    sources: Optional[List[str]] = None
    behaviorHints: Optional[StreamBehaviorHints] = None


class MetaLink(_Model):
    name: str
    category: str
    url: str


class Trailer(_Model):
    source: str
    type: Literal["Trailer", "Clip"]


class Video(_Model):
    id: str
    title: str
    released: str
    thumbnail: Optional[str] = None
    episode: Optional[int] = None
    season: Optional[int] = None
    overview: Optional[str] = None
    streams: Optional[List[Stream]] = None
    available: Optional[bool] = None
    trailers: Optional[List[Stream]] = None


PosterShape = Literal["square", "poster", "landscape"]


class CatalogItem(_Model):
    id: str
    type: ContentType
    name: str
    poster: Optional[str] = None
    posterShape: Optional[PosterShape] = None
    videos: Optional[List[Video]] = None
    background: Optional[str] = None
    description: Optional[str] = None
    genres: Optional[List[str]] = None
    releaseInfo: Optional[str] = None
    director: Optional[List[str]] = None
    cast: Optional[List[str]] = None
    imdbRating: Optional[str] = None
    links: Optional[List[MetaLink]] = None
    trailers: Optional[List[Trailer]] = None


class MetaBehaviorHints(_Model):
    defaultVideoId: Optional[str] = None


class Meta(_Model):
    id: str
    type: ContentType
    name: str
    poster: Optional[str] = None
    posterShape: Optional[PosterShape] = None
    background: Optional[str] = None
    logo: Optional[str] = None
    description: Optional[str] = None
    releaseInfo: Optional[str] = None
    released: Optional[str] = None
    runtime: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None
    awards: Optional[str] = None
    website: Optional[str] = None
    genres: Optional[List[str]] = None
    director: Optional[List[str]] = None
    cast: Optional[List[str]] = None
    imdbRating: Optional[str] = None
    trailers: Optional[List[Trailer]] = None
    links: Optional[List[MetaLink]] = None
    videos: Optional[List[Video]] = None
    behaviorHints: Optional[MetaBehaviorHints] = None


class AddonCatalogItem(_Model):
    transportName: str
    transportUrl: str
    manifest: Manifest


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class CacheHints(_Model):
    cacheMaxAge: Optional[int] = None
    staleRevalidate: Optional[int] = None
    staleError: Optional[int] = None


class StreamResponse(CacheHints):
    streams: List[Stream]


class CatalogResponse(CacheHints):
    metas: List[CatalogItem]


class MetaResponse(CacheHints):
    meta: Optional[Meta] = None


class SubtitlesResponse(CacheHints):
    subtitles: List[Subtitle]


class AddonCatalogResponse(CacheHints):
    addons: List[AddonCatalogItem]


Payload = Union[BaseModel, Dict[str, Any]]

StreamHandler = Callable[[str, str, Optional[ConfigValues]], Awaitable[Payload]]
CatalogHandler = Callable[
    [str, str, Optional[CatalogExtraArgs], Optional[ConfigValues]], Awaitable[Payload]
]
MetaHandler = Callable[[str, str, Optional[ConfigValues]], Awaitable[Optional[Payload]]]
SubtitlesHandler = Callable[
    [str, str, Optional[SubtitlesExtraArgs], Optional[ConfigValues]], Awaitable[Payload]
]
AddonCatalogHandler = Callable[[str, str, Optional[ConfigValues]], Awaitable[Payload]]
