# src/pathtracer/geometry/bvh.py
import logging
from typing import List, Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class BVHNode(Hittable):
    """
    Node of a bounding volume hierarchy.

    Each node owns two children (primitives or further nodes) and caches the
    box that encloses both. The tree is built once by median split along the
    longest axis of the node's box and never changes afterwards.

    A node built over a single object points both children at that object;
    traversal then tests it twice.
    """
    def __init__(self, objects: List[Hittable], start: int, end: int):
        object_span = end - start
        if object_span <= 0:
            raise ValueError("cannot build a BVH node over an empty range")

        # Compute the bounding box of all objects for this node
        self.bbox = AABB.EMPTY
        for i in range(start, end):
            self.bbox = AABB.surrounding_box(self.bbox, objects[i].bounding_box())

        axis = self.bbox.longest_axis()

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
        else:
            # Order by box minimum on the split axis; the box midpoint breaks
            # ties so coincident minimums still split deterministically.
            def key(obj: Hittable):
                box = obj.bounding_box()
                return box.axis_interval(axis).min, box.centroid(axis)

            objects[start:end] = sorted(objects[start:end], key=key)

            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid)
            self.right = BVHNode(objects, mid, end)

    @classmethod
    def from_list(cls, hittables) -> "BVHNode":
        """
        Builds a tree over a HittableList (or any iterable of hittables).

        The build reorders a private copy, so the caller's list is left as
        it was.
        """
        objects = list(hittables)
        root = cls(objects, 0, len(objects))
        logger.debug("Built BVH over %d objects: %d nodes, depth %d",
                     len(objects), root.node_count(), root.depth())
        return root

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if not self.bbox.hit(ray, ray_t):
            return None

        hit_left = self.left.hit(ray, ray_t)
        # Anything the right child reports must be closer than the left hit.
        right_t = Interval(ray_t.min, hit_left.t if hit_left is not None else ray_t.max)
        hit_right = self.right.hit(ray, right_t)

        return hit_right if hit_right is not None else hit_left

    def bounding_box(self) -> AABB:
        return self.bbox

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)

    def node_count(self) -> int:
        count = 1
        if isinstance(self.left, BVHNode):
            count += self.left.node_count()
        if isinstance(self.right, BVHNode) and self.right is not self.left:
            count += self.right.node_count()
        return count
