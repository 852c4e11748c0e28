from lightbox.Vec2 import Vec2
from lightbox.ray import Ray


# samples per lens face, t = 0, 0.1, ... 1.0
CURVE_POINTS = 11


class Mesh:

    def __init__(self, points=None):
        # will be an array of x,y coordinates (Vec2)
        self.points : list[Vec2] = [] if points is None else [p.copy() for p in points]

    def generate_bezier(self, p0 : Vec2, ctrl : Vec2, p1 : Vec2, point_amount : int = CURVE_POINTS):
        """
            Samples the quadratic Bezier curve (1-t)^2 p0 + 2t(1-t) ctrl + t^2 p1 at
            point_amount evenly spaced parameters. The first and last samples are p0
            and p1 exactly.
        """
        self.points = []
        last = point_amount - 1

        for i in range(point_amount):
            if i == 0:
                self.points.append(p0.copy())
                continue
            if i == last:
                self.points.append(p1.copy())
                continue

            t = i / last
            a = (1 - t)**2
            b = 2 * t * (1 - t)
            c = t**2
            self.points.append(Vec2(
                a * p0.x + b * ctrl.x + c * p1.x,
                a * p0.y + b * ctrl.y + c * p1.y))
        return self

    def __str__(self):
        s = "Mesh["
        for p in self.points:
            s += str(p) + ","

        return s + "]"

    def __len__(self):
        return len(self.points)

    def rayify(self, closed : bool = False) -> list[Ray]:
        """
            Converts the entire mesh into an array of rays, one per consecutive point
            pair. A closed mesh also gets the segment from the last point back to the
            first.

            Returns:
                List of rays representing the mesh
        """
        _rays = []
        for x in range(len(self.points) - 1):
            _rays.append(Ray.FromPoints(self.points[x], self.points[x+1]))

        if closed and len(self.points) > 2:
            _rays.append(Ray.FromPoints(self.points[-1], self.points[0]))
        return _rays
