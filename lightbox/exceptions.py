"""
Exceptions raised for caller mistakes (bad kinds, bad scene files, bad settings).

The simulation itself never raises: degenerate geometry, parallel motion and
unhandled element kinds are dealt with inside the intersector and the beam step.
"""


class LightboxError(Exception):
    """Base class for all lightbox errors."""
    pass


class UnknownElementKindError(LightboxError, ValueError):
    """An element kind name could not be resolved."""

    def __init__(self, name: str):
        super().__init__(f"Unknown element kind: {name!r}")
        self.name = name


class SceneFileError(LightboxError):
    """A scene file is missing required columns or holds unusable values."""
    pass


class ConfigError(LightboxError):
    """Simulation settings are invalid."""
    pass
