class StremioRewiredError(Exception):
    """Base class for errors raised by stremio_rewired."""


class ManifestError(StremioRewiredError):
    """The manifest handed to create_handler could not be validated."""
