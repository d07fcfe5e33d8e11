# src/pathtracer/materials/perlin.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.vector import Point3

POINT_COUNT = 256


class Perlin:
    """
    Lattice gradient noise with Hermite-smoothed trilinear interpolation.

    Nearby points return similar values, which makes it suitable for
    marble-like procedural textures. The tables are drawn from a numpy
    generator, so a seeded generator gives repeatable noise.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
        lengths[lengths == 0] = 1.0
        self.randvec = (vectors / lengths).tolist()
        self.perm_x = rng.permutation(POINT_COUNT).tolist()
        self.perm_y = rng.permutation(POINT_COUNT).tolist()
        self.perm_z = rng.permutation(POINT_COUNT).tolist()

    def noise(self, p: Point3) -> float:
        """
        Returns a smooth noise value in roughly [-1, 1] for point p.
        """
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fx, p.y - fy, p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        c = [[[None, None], [None, None]], [[None, None], [None, None]]]
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    c[di][dj][dk] = self.randvec[
                        self.perm_x[(i + di) & 255]
                        ^ self.perm_y[(j + dj) & 255]
                        ^ self.perm_z[(k + dk) & 255]
                    ]
        return _perlin_interp(c, u, v, w)

    def turb(self, p: Point3, depth: int = 7) -> float:
        """
        Sum of octaves of noise with halving weight, folded to be positive.
        """
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2
        return abs(accum)


def _perlin_interp(c, u: float, v: float, w: float) -> float:
    # Hermite cubic to round off the interpolation.
    uu = u * u * (3 - 2 * u)
    vv = v * v * (3 - 2 * v)
    ww = w * w * (3 - 2 * w)

    accum = 0.0
    for i in range(2):
        for j in range(2):
            for k in range(2):
                gx, gy, gz = c[i][j][k]
                dot = gx * (u - i) + gy * (v - j) + gz * (w - k)
                accum += ((i * uu + (1 - i) * (1 - uu))
                          * (j * vv + (1 - j) * (1 - vv))
                          * (k * ww + (1 - k) * (1 - ww))
                          * dot)
    return accum
