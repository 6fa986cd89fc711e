"""Exception types raised by the mdsaad catalog and render engine."""


class MdsaadError(Exception):
    """Base exception for mdsaad."""
    pass


class NotInitializedError(MdsaadError):
    """Raised when the art catalog is queried before initialize()."""
    pass


class CatalogLoadError(MdsaadError):
    """Raised when the art storage root cannot be read at all."""
    pass


class AnimationBusyError(MdsaadError):
    """Raised when an animation is started while another one is running."""
    pass
