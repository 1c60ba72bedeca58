"""
Aggregate queries over a fully aligned set of scanners.
"""

from typing import FrozenSet, List, Sequence, Set

import numpy as np

from ..core.alignment import Resolved
from ..core.types import Vector3d
from .transforms import PointCloud


def distinct_beacons(
    clouds: Sequence[PointCloud],
    alignments: Sequence[Resolved],
) -> FrozenSet[Vector3d]:
    """
    Collect every beacon in the global frame.

    Args:
        clouds: Local clouds, one per scanner
        alignments: Resolved alignment for each scanner, in the same order

    Returns:
        Union of all transformed clouds, deduplicated by value
    """
    if len(clouds) != len(alignments):
        raise ValueError(
            f"Got {len(clouds)} clouds but {len(alignments)} alignments"
        )

    beacons: Set[Vector3d] = set()
    for cloud, alignment in zip(clouds, alignments):
        beacons.update(alignment.apply(cloud).point_set)

    return frozenset(beacons)


def sensor_positions(alignments: Sequence[Resolved]) -> List[Vector3d]:
    """Scanner positions in the global frame."""
    return [alignment.translation for alignment in alignments]


def max_sensor_distance(alignments: Sequence[Resolved]) -> int:
    """Largest Manhattan distance between any two scanners."""
    if len(alignments) < 2:
        return 0

    positions = np.array(
        [position.as_tuple() for position in sensor_positions(alignments)],
        dtype=np.int64,
    )
    distances = np.abs(positions[:, None, :] - positions[None, :, :]).sum(axis=-1)
    return int(distances.max())
