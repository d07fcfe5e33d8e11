# src/pathtracer/core/aabb.py
import math
from pathtracer.core.interval import Interval
from pathtracer.core.vector import Vector3

# No side of a box is allowed to be thinner than this.
MIN_EXTENT = 0.0001


class AABB:
    """
    Axis-aligned bounding box stored as one interval per axis.

    Boxes built from intervals or points are padded so that every side is
    at least MIN_EXTENT wide; flat primitives would otherwise produce boxes
    the slab test can never hit.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: Interval = Interval.EMPTY, y: Interval = Interval.EMPTY,
                 z: Interval = Interval.EMPTY):
        self.x = x if x.size() >= MIN_EXTENT else x.expand(MIN_EXTENT)
        self.y = y if y.size() >= MIN_EXTENT else y.expand(MIN_EXTENT)
        self.z = z if z.size() >= MIN_EXTENT else z.expand(MIN_EXTENT)

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3) -> "AABB":
        # The two points are treated as extrema, in any order.
        return cls(
            Interval(a.x, b.x) if a.x <= b.x else Interval(b.x, a.x),
            Interval(a.y, b.y) if a.y <= b.y else Interval(b.y, a.y),
            Interval(a.z, b.z) if a.z <= b.z else Interval(b.z, a.z),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(
            Interval.enclosing(box0.x, box1.x),
            Interval.enclosing(box0.y, box1.y),
            Interval.enclosing(box0.z, box1.z),
        )

    def axis_interval(self, n: int) -> Interval:
        if n == 1:
            return self.y
        if n == 2:
            return self.z
        return self.x

    def hit(self, ray, ray_t: Interval) -> bool:
        # Slab method: shrink [t_min, t_max] by each axis's entry/exit times.
        t_min = ray_t.min
        t_max = ray_t.max
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            ax = self.axis_interval(axis)
            d = direction[axis]
            # A zero component means the ray is parallel to this slab.
            inv_d = 1.0 / d if d != 0.0 else math.copysign(math.inf, d)
            o = origin[axis]
            t0 = (ax.min - o) * inv_d
            t1 = (ax.max - o) * inv_d
            if t0 < t1:
                if t0 > t_min:
                    t_min = t0
                if t1 < t_max:
                    t_max = t1
            else:
                if t1 > t_min:
                    t_min = t1
                if t0 < t_max:
                    t_max = t0
            if t_max <= t_min:
                return False
        return True

    def longest_axis(self) -> int:
        # Ties go to the later axis.
        x, y, z = self.x.size(), self.y.size(), self.z.size()
        if x > y:
            return 0 if x > z else 2
        return 1 if y > z else 2

    def centroid(self, n: int) -> float:
        ax = self.axis_interval(n)
        return 0.5 * (ax.min + ax.max)

    def __add__(self, offset: Vector3) -> "AABB":
        return AABB(self.x + offset.x, self.y + offset.y, self.z + offset.z)

    __radd__ = __add__

    def __repr__(self) -> str:
        return f"AABB({self.x!r}, {self.y!r}, {self.z!r})"


AABB.EMPTY = AABB(Interval.EMPTY, Interval.EMPTY, Interval.EMPTY)
AABB.UNIVERSE = AABB(Interval.UNIVERSE, Interval.UNIVERSE, Interval.UNIVERSE)
