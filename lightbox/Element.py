from enum import Enum

from lightbox.Vec2 import Vec2
from lightbox.Mesh import Mesh
from lightbox.exceptions import UnknownElementKindError


class ElementKind(Enum):
    LIGHT_SOURCE = "LightSource"
    MIRROR = "Mirror"
    PRISM = "Prism"
    CONVEX_LENS = "ConvexLens"
    CONCAVE_LENS = "ConcaveLens"

    @property
    def is_lens(self) -> bool:
        return self in (ElementKind.CONVEX_LENS, ElementKind.CONCAVE_LENS)

    @staticmethod
    def parse(name):
        """
            Resolves a kind from its value or a common alias ("lightbox", "convex", ...).
            Matching ignores case, spaces, dashes and underscores.
        """
        if isinstance(name, ElementKind):
            return name
        key = "".join(ch for ch in str(name).lower() if ch.isalnum())
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        raise UnknownElementKindError(name)


_KIND_ALIASES = {
    "lightsource": ElementKind.LIGHT_SOURCE,
    "lightbox": ElementKind.LIGHT_SOURCE,
    "light": ElementKind.LIGHT_SOURCE,
    "source": ElementKind.LIGHT_SOURCE,
    "mirror": ElementKind.MIRROR,
    "prism": ElementKind.PRISM,
    "convexlens": ElementKind.CONVEX_LENS,
    "convex": ElementKind.CONVEX_LENS,
    "concavelens": ElementKind.CONCAVE_LENS,
    "concave": ElementKind.CONCAVE_LENS,
}


class PolygonShape:
    """Straight-edged outline, counter-clockwise, in local space."""

    def __init__(self, vertices : list[Vec2]):
        self.outline = Mesh(vertices)

    def corners(self) -> list[Vec2]:
        return self.outline.points

    def outline_points(self) -> list[Vec2]:
        return self.outline.points

    def faces(self):
        return None


class LensShape:
    """
        Four corners plus two precomputed curve polylines replacing the flat
        left and right edges. The right face runs br -> tr and the left face
        tl -> bl so the whole outline stays counter-clockwise.
    """

    def __init__(self, bl : Vec2, br : Vec2, tr : Vec2, tl : Vec2, left_ctrl : Vec2, right_ctrl : Vec2):
        self.bl = bl
        self.br = br
        self.tr = tr
        self.tl = tl

        self.right_face = Mesh().generate_bezier(br, right_ctrl, tr)
        self.left_face = Mesh().generate_bezier(tl, left_ctrl, bl)

    def corners(self) -> list[Vec2]:
        return [self.bl, self.br, self.tr, self.tl]

    def outline_points(self) -> list[Vec2]:
        # br..tr, then tl..bl; closing bl -> br is the bottom edge
        return self.right_face.points + self.left_face.points

    def faces(self):
        return self.right_face, self.left_face


def world_point(local_point : Vec2, element) -> Vec2:
    """
        Local -> world: rotate about the element's origin by its accumulated rotation,
        then translate by its center.
    """
    return local_point.Rotate(element.rotation) + element.center


class OpticalElement:

    def __init__(self, kind : ElementKind, shape, center : Vec2, rotation : float = 0.0, name : str = None):
        self.kind = kind
        self.shape = shape
        self.center = center.copy()
        self.rotation = float(rotation)
        self.name = name if name is not None else kind.value

    def __repr__(self):
        return "OpticalElement({}, center={}, rotation={:.2f})".format(self.name, self.center, self.rotation)

    def Rotate(self, delta_degrees : float):
        # rotation accumulates
        self.rotation += delta_degrees

    def MoveTo(self, anchor : Vec2):
        self.center = anchor.copy()

    def copy(self):
        # shapes are immutable after creation and can be shared
        return OpticalElement(self.kind, self.shape, self.center, self.rotation, self.name)

    def WorldVertices(self) -> list[Vec2]:
        return [world_point(p, self) for p in self.shape.corners()]

    def WorldOutline(self) -> list[Vec2]:
        return [world_point(p, self) for p in self.shape.outline_points()]

    def WorldFaces(self):
        """
            (right, left) lens faces in world space, or None for straight-edged kinds.
        """
        faces = self.shape.faces()
        if faces is None:
            return None
        return tuple([world_point(p, self) for p in face.points] for face in faces)

    def WorldEdges(self):
        return Mesh(self.WorldOutline()).rayify(closed=True)


# local footprints, y up, counter-clockwise
LIGHT_SOURCE_HALF = 25.0
MIRROR_HALF_WIDTH, MIRROR_HALF_HEIGHT = 5.0, 30.0
PRISM_HALF = 25.0
CONVEX_HALF_WIDTH, CONVEX_HALF_HEIGHT, CONVEX_BULGE = 5.0, 30.0, 15.0
CONCAVE_HALF_WIDTH, CONCAVE_HALF_HEIGHT = 10.0, 30.0


def _rectangle(half_w : float, half_h : float) -> list[Vec2]:
    return [Vec2(-half_w, -half_h), Vec2(half_w, -half_h), Vec2(half_w, half_h), Vec2(-half_w, half_h)]


def make_shape(kind : ElementKind):
    if kind == ElementKind.LIGHT_SOURCE:
        return PolygonShape(_rectangle(LIGHT_SOURCE_HALF, LIGHT_SOURCE_HALF))
    elif kind == ElementKind.MIRROR:
        return PolygonShape(_rectangle(MIRROR_HALF_WIDTH, MIRROR_HALF_HEIGHT))
    elif kind == ElementKind.PRISM:
        return PolygonShape([Vec2(-PRISM_HALF, -PRISM_HALF), Vec2(PRISM_HALF, -PRISM_HALF), Vec2(0, PRISM_HALF)])
    elif kind == ElementKind.CONVEX_LENS:
        bl, br, tr, tl = _rectangle(CONVEX_HALF_WIDTH, CONVEX_HALF_HEIGHT)
        return LensShape(bl, br, tr, tl, Vec2(-CONVEX_BULGE, 0), Vec2(CONVEX_BULGE, 0))
    elif kind == ElementKind.CONCAVE_LENS:
        bl, br, tr, tl = _rectangle(CONCAVE_HALF_WIDTH, CONCAVE_HALF_HEIGHT)
        return LensShape(bl, br, tr, tl, Vec2(0, 0), Vec2(0, 0))
    raise UnknownElementKindError(kind)


def create_element(kind, anchor : Vec2, rotation : float = 0.0, name : str = None) -> OpticalElement:
    kind = ElementKind.parse(kind)
    return OpticalElement(kind, make_shape(kind), anchor, rotation, name)


class LightSource:
    """
        Emission geometry of the light box: the beam leaves from the midpoint of
        the right (br -> tr) edge along that edge's outward normal.
    """

    EMISSION_EDGE = (1, 2)

    @staticmethod
    def EmissionPoint(element : OpticalElement) -> Vec2:
        corners = element.shape.corners()
        a, b = LightSource.EMISSION_EDGE
        mid = (corners[a] + corners[b]) * 0.5
        return world_point(mid, element)

    @staticmethod
    def EmissionNormal(element : OpticalElement) -> Vec2:
        corners = element.shape.corners()
        a, b = LightSource.EMISSION_EDGE
        edge = (corners[b] - corners[a]).Rotate(element.rotation)
        return edge.Perp().Normalized()
