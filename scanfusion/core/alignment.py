"""
Scanner alignment engine.

Every scanner reports beacons in its own frame. Scanner 0 (by default)
defines the global frame; every other scanner is placed by finding an
already placed scanner whose global cloud overlaps its local cloud. The
engine repeats passes over the unplaced scanners until all are placed, and
fails loudly as soon as a whole pass makes no progress.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set, Tuple, Union
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from loguru import logger

from .config import AlignmentConfig
from .exceptions import AlignmentFailed, AlignmentInputError
from .types import IDENTITY, ZERO, RotationMatrix, Vector3d
from .utils import ProgressTracker

if TYPE_CHECKING:
    from ..data.transforms import PointCloud


@dataclass(frozen=True)
class Unresolved:
    """Scanner whose placement is not known yet."""


@dataclass(frozen=True)
class Resolved:
    """Scanner placed in the global frame."""
    orientation: RotationMatrix
    translation: Vector3d

    def apply(self, cloud: PointCloud) -> PointCloud:
        """Map a local cloud into the global frame."""
        return cloud.transform(self.orientation, self.translation)


SensorState = Union[Unresolved, Resolved]

UNRESOLVED = Unresolved()
REFERENCE = Resolved(IDENTITY, ZERO)


def _match_against(
    cloud: PointCloud,
    candidates: Sequence[Tuple[int, PointCloud]],
    threshold: int,
) -> Optional[Tuple[int, Resolved]]:
    for index, global_cloud in candidates:
        found = cloud.overlap_transform(global_cloud, threshold)
        if found is not None:
            orientation, translation = found
            return index, Resolved(orientation, translation)
    return None


class AlignmentEngine:
    """
    Fixed-point propagation of scanner placements.

    Each slot of the state table is either ``Unresolved`` or ``Resolved``.
    A pass works from a snapshot of the clouds resolved before it began, so
    a scanner placed during a pass is only used as a match target from the
    next pass on. This keeps sequential and parallel runs identical.
    """

    def __init__(self, config: Optional[AlignmentConfig] = None):
        self.config = config or AlignmentConfig()
        self.passes = 0

    def align(
        self,
        clouds: Sequence[PointCloud],
        visit_order: Optional[Sequence[int]] = None,
    ) -> List[Resolved]:
        """
        Place every scanner in the global frame.

        Args:
            clouds: Local cloud of each scanner
            visit_order: Order in which unresolved scanners are tried, and in
                which placed scanners are offered as match targets; defaults
                to index order

        Returns:
            Resolved alignment of each scanner, in input order

        Raises:
            AlignmentInputError: On empty input or an invalid reference or
                visit order
            AlignmentFailed: If a pass makes no progress or the pass budget
                runs out
        """
        count = len(clouds)
        if count == 0:
            raise AlignmentInputError("Cannot align an empty set of scanners")

        reference = self.config.reference_index
        if not 0 <= reference < count:
            raise AlignmentInputError(f"Reference scanner {reference} out of range for {count} scanners")

        order = self._visit_order(count, visit_order)
        max_passes = self.config.max_passes if self.config.max_passes is not None else count

        states: List[SensorState] = [UNRESOLVED] * count
        states[reference] = REFERENCE
        global_clouds: Dict[int, PointCloud] = {reference: clouds[reference]}
        # (unresolved, resolved) pairs already known not to overlap
        failed: Set[Tuple[int, int]] = set()

        self.passes = 0
        pending = [i for i in order if i != reference]
        progress = ProgressTracker(len(pending), description="Aligning scanners")

        while pending:
            if self.passes >= max_passes:
                raise AlignmentFailed(pending, self.passes, reason="pass budget exhausted")

            self.passes += 1
            snapshot = [(i, global_clouds[i]) for i in order if i in global_clouds]
            candidates = [
                [(j, cloud) for j, cloud in snapshot if (i, j) not in failed]
                for i in pending
            ]
            results = self._run_pass(clouds, pending, candidates)

            resolved_now = []
            for index, tried, outcome in zip(pending, candidates, results):
                if outcome is None:
                    failed.update((index, j) for j, _ in tried)
                    continue
                matched_with, state = outcome
                states[index] = state
                resolved_now.append(index)
                logger.debug(
                    f"Scanner {index} placed at {state.translation} via scanner {matched_with}"
                )

            if not resolved_now:
                raise AlignmentFailed(pending, self.passes)

            for index in resolved_now:
                global_clouds[index] = states[index].apply(clouds[index])

            pending = [i for i in pending if isinstance(states[i], Unresolved)]
            logger.debug(f"Alignment pass {self.passes}: {len(pending)} scanners remaining")
            progress.update(len(resolved_now))

        progress.finish()
        return [state for state in states if isinstance(state, Resolved)]

    def _run_pass(
        self,
        clouds: Sequence[PointCloud],
        pending: Sequence[int],
        candidates: Sequence[Sequence[Tuple[int, PointCloud]]],
    ) -> List[Optional[Tuple[int, Resolved]]]:
        threshold = self.config.overlap_threshold
        workers = self.config.workers

        if workers > 1 and len(pending) > 1:
            with ProcessPoolExecutor(max_workers=min(workers, len(pending))) as executor:
                futures = [
                    executor.submit(_match_against, clouds[i], targets, threshold)
                    for i, targets in zip(pending, candidates)
                ]
                return [future.result() for future in futures]

        return [
            _match_against(clouds[i], targets, threshold)
            for i, targets in zip(pending, candidates)
        ]

    @staticmethod
    def _visit_order(count: int, visit_order: Optional[Sequence[int]]) -> List[int]:
        if visit_order is None:
            return list(range(count))

        order = list(visit_order)
        if sorted(order) != list(range(count)):
            raise AlignmentInputError(f"Visit order must be a permutation of 0..{count - 1}, got {order}")
        return order
