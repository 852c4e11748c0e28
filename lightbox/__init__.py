"""
lightbox - step point light beams through a 2-D scene of rotatable mirrors,
prisms and lenses.
"""

from lightbox.Vec2 import Vec2
from lightbox.Element import ElementKind, OpticalElement, LightSource, create_element, world_point
from lightbox.Mesh import Mesh
from lightbox.ray import Ray, RayCollision, earliest_hit
from lightbox.LightRay import LightRay, LightRayCollision, BeamState
from lightbox.Scene import Scene
from lightbox.config import SimSettings
from lightbox.scheduler import FrameScheduler
from lightbox.exceptions import LightboxError, UnknownElementKindError, SceneFileError, ConfigError

__version__ = "0.1.0"

__all__ = [
    "Vec2",
    "ElementKind",
    "OpticalElement",
    "LightSource",
    "create_element",
    "world_point",
    "Mesh",
    "Ray",
    "RayCollision",
    "earliest_hit",
    "LightRay",
    "LightRayCollision",
    "BeamState",
    "Scene",
    "SimSettings",
    "FrameScheduler",
    "LightboxError",
    "UnknownElementKindError",
    "SceneFileError",
    "ConfigError",
]
