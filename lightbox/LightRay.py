import logging
from enum import Enum

from lightbox.Vec2 import Vec2
from lightbox.ray import RayCollision, earliest_hit
from lightbox.Element import ElementKind
from lightbox.optics import reflect2, refract2

logger = logging.getLogger(__name__)


def reflect(vec : Vec2, unit_normal : Vec2) -> Vec2:
    rx, ry = reflect2(vec.x, vec.y, unit_normal.x, unit_normal.y)
    return Vec2(rx, ry)


class LightRayCollision:
    """
        Reflected and transmitted directions for a beam direction meeting the
        surface of a collision. Both keep the magnitude of the incoming vector.
    """

    def __init__(self, collision: RayCollision, incoming: Vec2, eta: float = 1.0):
        self.col = collision
        self.eta = eta

        speed = incoming.Length()
        unit_in = incoming.Normalized()

        # flip the normal so it faces the incoming beam
        unit_norm = collision.surface_ray.Normal()
        if unit_in.dot(unit_norm) > 0:
            unit_norm = -unit_norm
        self.normal = unit_norm

        self.reflected = reflect(incoming, unit_norm)

        ok, tx, ty = refract2(unit_in.x, unit_in.y, unit_norm.x, unit_norm.y, eta)
        # None on total internal reflection
        self.transmitted = Vec2(tx, ty).Normalized() * speed if ok else None

    @property
    def total_internal_reflection(self) -> bool:
        return self.transmitted is None


class BeamState(Enum):
    TRAVELING = "traveling"
    TERMINATED = "terminated"


class LightRay:
    """
        A beam: current position, per-frame direction vector and the trace of every
        point it has occupied. A position of None means the beam has not been seeded.
    """

    def __init__(self, start_pos : Vec2 = None, direction : Vec2 = None, name : str = "beam"):
        self.name = name
        self.position : Vec2 = None
        self.direction : Vec2 = Vec2()
        self.state = BeamState.TRAVELING
        self.trace : list[Vec2] = []

        self.Reset(start_pos, direction)

    def __repr__(self):
        return "LightRay({}, pos={}, dir={}, {}, {} pts)".format(
            self.name, self.position, self.direction, self.state.value, len(self.trace))

    def Reset(self, start_pos : Vec2 = None, direction : Vec2 = None):
        """
            Re-seeds the beam. The trace is cleared down to the new seed point (or
            emptied when the beam is left unset).
        """
        self.position = None if start_pos is None else start_pos.copy()
        if direction is not None:
            self.direction = direction.copy()
        self.state = BeamState.TRAVELING
        self.trace = [] if self.position is None else [self.position.copy()]

    @property
    def is_active(self) -> bool:
        return (self.state == BeamState.TRAVELING
                and self.position is not None
                and not self.direction.is_zero())

    def History(self) -> list[Vec2]:
        return [p.copy() for p in self.trace]

    def _move_to(self, point : Vec2):
        self.position = point
        self.trace.append(point.copy())

    def _terminate(self):
        self.direction = Vec2(0.0, 0.0)
        self.state = BeamState.TERMINATED

    def Step(self, elements, settings) -> int:
        """
            Advances the beam through one frame.

            Mirrors are handled inside the frame: after a reflection the unconsumed
            part of the step is tested again, so one frame may bounce several times
            (up to settings.max_bounces_per_frame). Hitting the light source stops the
            beam for good. A lens hit moves the beam by the full step, refracts its
            direction and ends the frame. Prisms are passed through.

            Args:
                elements : element snapshot for this frame (order is the tie-break order)
                settings : SimSettings

            Returns:
                number of mirror reflections this frame
        """
        if not settings.enabled or not self.is_active:
            return 0

        if not self.trace:
            self.trace.append(self.position.copy())

        step = self.direction * settings.step_factor
        bounces = 0

        while True:
            col = earliest_hit(self.position, step, elements)

            if col is None or col.t > 1.0:
                self._move_to(self.position + step)
                return bounces

            kind = col.element.kind

            if kind == ElementKind.MIRROR:
                self._move_to(col.Point(self.position, step))

                normal = col.surface_ray.Normal()
                step = reflect(step, normal) * (1.0 - col.t)
                self.direction = reflect(self.direction, normal)
                bounces += 1
                logger.debug("%s reflected off %s at %s", self.name, col.element.name, self.position)

                if bounces >= settings.max_bounces_per_frame:
                    logger.debug("%s hit the bounce ceiling (%d) this frame", self.name, bounces)
                    return bounces
                if step.is_zero():
                    return bounces

            elif kind == ElementKind.LIGHT_SOURCE:
                self._move_to(col.Point(self.position, step))
                self._terminate()
                logger.debug("%s terminated at light source, %s", self.name, self.position)
                return bounces

            elif kind.is_lens:
                # not clipped to the surface
                self._move_to(self.position + step)

                lr_col = LightRayCollision(col, self.direction, settings.index_ratio)
                if lr_col.total_internal_reflection:
                    logger.debug("%s totally reflected by %s", self.name, col.element.name)
                    self.direction = lr_col.reflected
                else:
                    self.direction = lr_col.transmitted
                    logger.debug("%s refracted by %s at %s", self.name, col.element.name, self.position)
                return bounces

            elif kind == ElementKind.PRISM:
                self._move_to(self.position + step)
                return bounces

            else:
                logger.warning("%s hit unhandled element kind %s; passing through", self.name, kind)
                self._move_to(self.position + step)
                return bounces
