import logging

from lightbox.Vec2 import Vec2
from lightbox.Element import ElementKind, OpticalElement, LightSource, create_element
from lightbox.LightRay import LightRay
from lightbox.config import SimSettings

logger = logging.getLogger(__name__)


class Scene:
    """
        Ordered optical elements plus a fixed set of beams.

        Every frame works on a snapshot (copies) of the element list, so a rotation
        or placement made while a frame is running can never be seen half-way
        through a scan. Edits can also be queued with Queue(); they are applied
        right before the next frame's snapshot is taken.
    """

    def __init__(self, settings : SimSettings = None):
        self.settings = settings if settings is not None else SimSettings()

        self._elements : list[OpticalElement] = []
        self._pending = []
        self.frame = 0

        self.beams : list[LightRay] = [
            LightRay(name="beam{}".format(i)) for i in range(self.settings.beam_count)
        ]
        self.ResetBeams()

    def __repr__(self):
        return "Scene({} elements, {} beams, frame {})".format(len(self._elements), len(self.beams), self.frame)

    def __len__(self):
        return len(self._elements)

    # ------------------------------------------------------------------
    # editing

    def _resolve(self, target) -> OpticalElement:
        if isinstance(target, OpticalElement):
            if target not in self._elements:
                raise ValueError("{} is not part of this scene".format(target))
            return target
        return self._elements[target]

    def AddElement(self, kind, anchor : Vec2, rotation : float = None) -> OpticalElement:
        """
            Places a new element centred on `anchor`. There is only one light source:
            placing it again moves the existing one and, when `rotation` is given, sets
            its rotation to that absolute angle.
        """
        kind = ElementKind.parse(kind)

        if kind == ElementKind.LIGHT_SOURCE:
            existing = self.LightSourceElement()
            if existing is not None:
                existing.MoveTo(anchor)
                if rotation is not None:
                    existing.rotation = float(rotation)
                logger.info("Moved light source to %s", anchor)
                self._topology_changed()
                return existing

        name = "{}#{}".format(kind.value, sum(1 for e in self._elements if e.kind == kind))
        element = create_element(kind, anchor, rotation if rotation is not None else 0.0, name)
        self._elements.append(element)
        logger.info("Added %s at %s (rotation %.1f)", name, anchor, element.rotation)

        self._topology_changed()
        return element

    def RotateElement(self, target, delta_degrees : float) -> OpticalElement:
        element = self._resolve(target)
        element.Rotate(delta_degrees)
        logger.debug("Rotated %s by %.2f to %.2f", element.name, delta_degrees, element.rotation)

        if element.kind == ElementKind.LIGHT_SOURCE:
            self._topology_changed()
        return element

    def MoveLightSource(self, anchor : Vec2) -> OpticalElement:
        return self.AddElement(ElementKind.LIGHT_SOURCE, anchor)

    def Queue(self, fn, *args, **kwargs):
        """
            Defers an edit (e.g. scene.Queue(scene.RotateElement, 0, 15)) until the
            start of the next frame.
        """
        self._pending.append((fn, args, kwargs))

    def ApplyPending(self) -> int:
        pending, self._pending = self._pending, []
        for fn, args, kwargs in pending:
            fn(*args, **kwargs)
        return len(pending)

    def _topology_changed(self):
        if self.settings.auto_reset:
            self.ResetBeams()

    # ------------------------------------------------------------------
    # queries

    def Elements(self) -> tuple:
        """Snapshot of the element list; editing the scene does not touch it."""
        return tuple(e.copy() for e in self._elements)

    def LightSourceElement(self) -> OpticalElement:
        for e in self._elements:
            if e.kind == ElementKind.LIGHT_SOURCE:
                return e
        return None

    def Traces(self) -> list[list[Vec2]]:
        return [beam.History() for beam in self.beams]

    # ------------------------------------------------------------------
    # simulation

    def ResetBeams(self):
        """
            Puts every beam back on the light source's emission point, heading along the
            outward normal of its facing edge (fanned out by beam_spread_degrees), and
            clears the traces. Without a light source the beams are left unset with a
            rightward default direction.
        """
        speed = self.settings.beam_speed
        source = self.LightSourceElement()
        n = len(self.beams)

        if source is None:
            for beam in self.beams:
                beam.Reset(None, Vec2(speed, 0.0))
            logger.debug("No light source; beams left unset")
            return

        point = LightSource.EmissionPoint(source)
        normal = LightSource.EmissionNormal(source)
        for i, beam in enumerate(self.beams):
            offset = (i - (n - 1) / 2) * self.settings.beam_spread_degrees
            beam.Reset(point, normal.Rotate(offset) * speed)
        logger.debug("Reset %d beam(s) at %s heading %s", n, point, normal)

    def Advance(self) -> int:
        """
            One frame: applies queued edits, snapshots the elements and steps every beam
            once.

            Returns:
                total number of mirror reflections in this frame
        """
        self.ApplyPending()
        snapshot = self.Elements()

        bounces = 0
        for beam in self.beams:
            bounces += beam.Step(snapshot, self.settings)

        self.frame += 1
        return bounces
