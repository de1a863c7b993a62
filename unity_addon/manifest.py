MANIFEST = {
    "id": "org.stremio.unity",
    "version": "0.0.2",
    "name": "Unity",
    "description": "Source content and catalogs from AnimeUnity (italian anime streaming website)",
    "types": ["series"],
    "catalogs": [
        {
            "id": "unity",
            "type": "series",
            "name": "AnimeUnity",
            "extra": [{"name": "search", "isRequired": True}],
        }
    ],
    "resources": ["stream", "catalog", "meta"],
    "idPrefixes": ["au"],  # ID AnimeUnity: au<id>-<slug>
    "config": [
        {"key": "dub", "type": "checkbox", "title": "Solo anime doppiati (ITA)"},
    ],
    "behaviorHints": {"configurable": True},
}
