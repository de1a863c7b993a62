from .animeunity import AnimeUnityProvider, ProviderError

# Provider interrogato dagli handler in main.py.
PROVIDER = AnimeUnityProvider()

__all__ = ["PROVIDER", "AnimeUnityProvider", "ProviderError"]
