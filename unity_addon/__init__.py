"""Example addon serving AnimeUnity catalogs and streams."""
