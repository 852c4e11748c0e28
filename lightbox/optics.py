import numpy as np
from numba import njit


@njit(cache=True)
def rotate2(x: float, y: float, angle_degrees: float):
    """
    Rotates the point (x, y) counter-clockwise about the origin.

    Args:
        x, y: point in local coordinates
        angle_degrees: rotation angle in degrees

    Returns:
        (x', y') rotated point
    """
    a = angle_degrees * np.pi / 180.0
    c = np.cos(a)
    s = np.sin(a)
    return x * c - y * s, x * s + y * c


@njit(cache=True)
def hit_time(p1x, p1y, p2x, p2y, posx, posy, stepx, stepy) -> float:
    """
    Parametric time at which a point moving by (stepx, stepy) per frame crosses
    the segment p1 -> p2 from its outward side.

    The outward normal is the clockwise perpendicular of the edge vector. The
    test is bounded to the finite segment by projecting the point's next
    position onto the edge direction.

    Returns:
        t > 0 as a fraction of the step vector, or -1.0 when the edge is not a
        hit candidate (degenerate, out of span, wrong side, parallel or behind).
    """
    vdx = p2x - p1x
    vdy = p2y - p1y
    vdn = np.sqrt(vdx * vdx + vdy * vdy)
    if vdn == 0.0:
        return -1.0

    # clockwise perp
    ndx = vdy
    ndy = -vdx

    # next position must project inside the segment
    pdx = posx + stepx - p1x
    pdy = posy + stepy - p1y
    dd = (vdx * pdx + vdy * pdy) / vdn
    if not (dd >= 0.0 and dd <= vdn):
        return -1.0

    dnw = ndx * (p1x - posx) + ndy * (p1y - posy)
    if dnw >= 0.0:
        return -1.0

    dnv = ndx * stepx + ndy * stepy
    if dnv == 0.0:
        return -1.0

    t = dnw / dnv
    if t <= 0.0:
        return -1.0
    return t


@njit(cache=True)
def reflect2(d0x, d0y, nx, ny):
    # return reflected direction (rx, ry); n must be unit length
    dot = d0x*nx + d0y*ny
    return d0x - 2*dot*nx, d0y - 2*dot*ny


@njit(cache=True)
def refract2(d0x, d0y, nx, ny, eta):
    """
    Snell's law in vector form.

    Args:
        d0x, d0y: unit incident direction
        nx, ny: unit surface normal facing the incident side (dot(d0, n) < 0)
        eta: n_incident / n_transmitted

    Returns:
        (ok, rx, ry); ok is False on total internal reflection.
    """
    cos_i = -(d0x*nx + d0y*ny)
    if cos_i > 1.0:
        cos_i = 1.0
    elif cos_i < -1.0:
        cos_i = -1.0
    k = 1.0 - eta*eta*(1.0 - cos_i*cos_i)
    if k < 0.0:
        return False, 0.0, 0.0
    s = eta*cos_i - np.sqrt(k)
    rx = eta*d0x + s*nx
    ry = eta*d0y + s*ny
    return True, rx, ry

