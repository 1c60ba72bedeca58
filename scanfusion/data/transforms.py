"""
Point cloud transformations and overlap detection.

A point cloud holds the beacons reported by one scanner. Clouds are
immutable: rotating or translating one returns a new cloud. The overlap
search recovers the rigid transform that maps one cloud onto another when
enough of their points coincide exactly.
"""

from typing import AbstractSet, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from loguru import logger

from ..core.types import ORIENTATIONS, RotationMatrix, Vector3d


DEFAULT_OVERLAP_THRESHOLD = 12

Transform = Tuple[RotationMatrix, Vector3d]
Point = Tuple[int, int, int]


class PointCloud:
    """Immutable collection of integer points reported by a single scanner."""

    __slots__ = ("_points", "_point_set")

    def __init__(self, points: Iterable[Vector3d] = ()):
        self._points: Tuple[Vector3d, ...] = tuple(points)
        self._point_set: FrozenSet[Vector3d] = frozenset(self._points)

    @property
    def points(self) -> Tuple[Vector3d, ...]:
        """Points in report order."""
        return self._points

    @property
    def point_set(self) -> FrozenSet[Vector3d]:
        return self._point_set

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Vector3d]:
        return iter(self._points)

    def __contains__(self, point: object) -> bool:
        return point in self._point_set

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointCloud):
            return NotImplemented
        return self._point_set == other._point_set

    def __hash__(self) -> int:
        return hash(self._point_set)

    def __repr__(self) -> str:
        return f"PointCloud(num_points={len(self._points)})"

    def translate(self, delta: Vector3d) -> "PointCloud":
        """Offset every point by ``delta``."""
        return PointCloud(point + delta for point in self._points)

    def rotate(self, orientation: RotationMatrix) -> "PointCloud":
        """Pass every point through ``orientation``."""
        return PointCloud(orientation.apply(point) for point in self._points)

    def transform(self, orientation: RotationMatrix, translation: Vector3d) -> "PointCloud":
        """Rotate, then translate."""
        return PointCloud(orientation.apply(point) + translation for point in self._points)

    def overlap_transform(
        self,
        other: "PointCloud",
        threshold: int = DEFAULT_OVERLAP_THRESHOLD,
    ) -> Optional[Transform]:
        """
        Find a rigid transform that maps this cloud onto ``other``.

        For each of the 24 orientations, every pairing of a rotated point of
        this cloud with a point of ``other`` is taken as a hypothesis that
        both are the same beacon. The implied translation is accepted once
        the translated cloud shares at least ``threshold`` points with
        ``other``. The first qualifying hypothesis wins; it is not checked
        for uniqueness.

        Args:
            other: Cloud already expressed in the target frame
            threshold: Minimum number of coinciding points

        Returns:
            ``(orientation, translation)`` mapping this cloud into the frame
            of ``other``, or None if no hypothesis reaches the threshold
        """
        if threshold < 1:
            raise ValueError(f"Overlap threshold must be positive, got {threshold}")

        if len(self._point_set) < threshold or len(other.point_set) < threshold:
            return None

        target_list = [point.as_tuple() for point in dict.fromkeys(other.points)]
        targets = frozenset(target_list)
        distinct = list(dict.fromkeys(self._points))
        hypotheses = 0

        for orientation in ORIENTATIONS:
            rotated = [orientation.apply(point).as_tuple() for point in distinct]
            rejected: Set[Point] = set()

            for ax, ay, az in rotated:
                for qx, qy, qz in target_list:
                    translation = (qx - ax, qy - ay, qz - az)
                    if translation in rejected:
                        continue

                    hypotheses += 1
                    if _count_matches(rotated, translation, targets, threshold) >= threshold:
                        logger.debug(
                            f"Overlap found after {hypotheses} hypotheses: "
                            f"orientation={orientation}, translation={translation}"
                        )
                        return orientation, Vector3d(*translation)

                    rejected.add(translation)

        logger.debug(f"No overlap after {hypotheses} hypotheses")
        return None

    def common_points(
        self,
        other: "PointCloud",
        orientation: RotationMatrix,
        translation: Vector3d,
    ) -> FrozenSet[Vector3d]:
        """Points of ``other`` that this cloud lands on under the given transform."""
        return self.transform(orientation, translation).point_set & other.point_set


def _count_matches(
    rotated: List[Point],
    translation: Point,
    targets: AbstractSet[Point],
    threshold: int,
) -> int:
    # Stops early once the threshold is reached or can no longer be reached.
    tx, ty, tz = translation
    matches = 0
    misses_allowed = len(rotated) - threshold
    for x, y, z in rotated:
        if (x + tx, y + ty, z + tz) in targets:
            matches += 1
            if matches >= threshold:
                break
        else:
            misses_allowed -= 1
            if misses_allowed < 0:
                break
    return matches
