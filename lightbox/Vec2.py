import numpy as np

from lightbox.optics import rotate2


class Vec2:

    __slots__ = ("x", "y")

    def __init__(self, x=0.0, y=0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float):
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def __eq__(self, other):
        if not isinstance(other, Vec2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self):
        return "Vec2({}, {})".format(self.x, self.y)

    __repr__ = __str__

    def copy(self):
        return Vec2(self.x, self.y)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y

    def Length(self) -> float:
        return float(np.hypot(self.x, self.y))

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def Normalized(self):
        """
            Unit vector in the same direction; the zero vector is returned unchanged
            instead of dividing by zero.
        """
        _len = self.Length()
        if _len == 0.0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / _len, self.y / _len)

    def Perp(self):
        """
            Clockwise perpendicular (vy, -vx). For an edge of a counter-clockwise
            outline this points away from the polygon.
        """
        return Vec2(self.y, -self.x)

    def Rotate(self, angle_degrees: float):
        _x, _y = rotate2(self.x, self.y, angle_degrees)
        return Vec2(_x, _y)
