import logging

import numpy as np

from lightbox.Vec2 import Vec2
from lightbox.optics import hit_time

logger = logging.getLogger(__name__)


class RayCollision:
    def __init__(self, t: float, surface_ray, element=None):
        self.t = t                        # fraction of the step vector travelled before the hit
        self.surface_ray : Ray = surface_ray
        self.element = element            # element owning surface_ray; None for a bare edge

    def Point(self, source: Vec2, step: Vec2) -> Vec2:
        return source + step * self.t

    def __repr__(self):
        return f"RayCollision(t={self.t:.6f}, surface={self.surface_ray}, element={self.element})"


class Ray:

    def __init__(self, source_X : float = 0, source_Y : float = 0, angle_dir : float = 0, radius_dir : float = 1):
        # where the ray will start
        self.source_pos = Vec2(source_X, source_Y)

        # where the ray "ends"; will be set by
        # SetDirectionByAngle or SetDirectionByPoint
        self.end_pos = Vec2()
        self.SetDirectionByAngle(angle_dir, radius_dir)

    @staticmethod
    def FromPoints(p1 : Vec2, p2 : Vec2):
        r = Ray(p1.x, p1.y)
        r.SetDirectionByPoint(p2)
        return r

    def SetDirectionByAngle(self, angle_degrees : float, radius: float):
        self.end_pos.x = self.source_pos.x + radius * np.cos(np.radians(angle_degrees))
        self.end_pos.y = self.source_pos.y + radius * np.sin(np.radians(angle_degrees))

    def SetDirectionByPoint(self, point : Vec2):
        self.end_pos = Vec2(point.x, point.y)

    def Vector(self) -> Vec2:
        return self.end_pos - self.source_pos

    def Length(self) -> float:
        return self.Vector().Length()

    def Normal(self) -> Vec2:
        """
            Unit outward normal (clockwise perpendicular of the ray vector). Zero for a
            degenerate ray.
        """
        return self.Vector().Perp().Normalized()

    def __repr__(self):
        return "Ray({} -> {})".format(self.source_pos, self.end_pos)

    @staticmethod
    def Collision(source : Vec2, step : Vec2, surface_ray) -> RayCollision:
        """
            Tests a point moving from `source` by `step` against one surface ray.

            Returns:
                RayCollision with the hit time as a fraction of `step`, or None when the
                surface is not a candidate (degenerate, parallel, out of span, behind).
        """
        t = hit_time(
            surface_ray.source_pos.x, surface_ray.source_pos.y,
            surface_ray.end_pos.x, surface_ray.end_pos.y,
            source.x, source.y,
            step.x, step.y,
        )
        if t <= 0.0:
            return None
        return RayCollision(t, surface_ray)


def earliest_hit(source : Vec2, step : Vec2, elements) -> RayCollision:
    """
        Scans every edge of every element (in the given order) and returns the
        collision with the smallest hit time. Equal hit times keep the first one found.

        Args:
            source : current beam position
            step : displacement for this frame
            elements : iterable of objects exposing WorldEdges()

        Returns:
            The nearest RayCollision or None. The hit time is not bounded by 1; callers
            decide whether the hit lies within the step.
    """
    record_col = None

    for element in elements:
        for surface_ray in element.WorldEdges():
            col = Ray.Collision(source, step, surface_ray)
            if col is None:
                continue
            if record_col is None or col.t < record_col.t:
                col.element = element
                record_col = col

    if record_col is not None:
        logger.debug("earliest hit t=%.6f on %s", record_col.t, record_col.element)
    return record_col
