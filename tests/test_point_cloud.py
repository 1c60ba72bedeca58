"""
Tests for point cloud transforms and overlap detection.
"""

import pytest

from scanfusion.core.types import IDENTITY, ORIENTATIONS, Vector3d
from scanfusion.data.transforms import PointCloud


def cloud(*points):
    return PointCloud(Vector3d(*p) for p in points)


class TestPointCloudTransforms:
    """Test whole-cloud rigid transforms."""

    def test_translate(self):
        original = cloud((1, 1, 1), (2, 2, 2), (3, 3, 3))
        assert original.translate(Vector3d(1, 2, 3)) == cloud((2, 3, 4), (3, 4, 5), (4, 5, 6))

    def test_rotate(self):
        original = cloud((1, 0, 0), (0, 1, 0), (0, 0, 1))
        assert original.rotate(ORIENTATIONS[1]) == cloud((0, 1, 0), (-1, 0, 0), (0, 0, 1))

    def test_transform_is_rotate_then_translate(self):
        original = cloud((5, -3, 2), (0, 7, -1))
        orientation = ORIENTATIONS[9]
        delta = Vector3d(10, 20, 30)
        assert original.transform(orientation, delta) == original.rotate(orientation).translate(delta)

    def test_transforms_do_not_mutate(self):
        original = cloud((1, 2, 3))
        original.translate(Vector3d(1, 1, 1))
        original.rotate(ORIENTATIONS[3])
        assert original.points == (Vector3d(1, 2, 3),)

    def test_equality_ignores_order(self):
        assert cloud((1, 2, 3), (4, 5, 6)) == cloud((4, 5, 6), (1, 2, 3))
        assert cloud((1, 2, 3)) != cloud((1, 2, 4))

    def test_container_protocol(self):
        c = cloud((1, 2, 3), (4, 5, 6))
        assert len(c) == 2
        assert Vector3d(4, 5, 6) in c
        assert Vector3d(7, 8, 9) not in c
        assert list(c) == [Vector3d(1, 2, 3), Vector3d(4, 5, 6)]


class TestOverlapTransform:
    """Test the overlap search."""

    @pytest.fixture
    def small_pair(self):
        source = cloud((0, 2, 0), (4, 1, 0), (3, 3, 0))
        offset = Vector3d(5, -2, 0)
        return source, source.translate(offset), offset

    def test_recovers_known_offset(self, small_pair):
        source, target, offset = small_pair
        result = source.overlap_transform(target, threshold=3)
        assert result is not None

        orientation, translation = result
        assert orientation == IDENTITY
        assert translation == offset

    def test_threshold_above_shared_count_finds_nothing(self, small_pair):
        source, target, _ = small_pair
        assert source.overlap_transform(target, threshold=4) is None

    def test_recovers_rotation_and_offset(self):
        source = cloud((1, 2, 3), (-4, 7, 0), (10, -3, 5), (6, 6, -6), (0, 0, 9))
        orientation = ORIENTATIONS[13]
        offset = Vector3d(-50, 30, 12)
        target = source.transform(orientation, offset)

        found = source.overlap_transform(target, threshold=5)
        assert found is not None
        assert source.transform(*found) == target

    def test_rejects_non_positive_threshold(self, small_pair):
        source, target, _ = small_pair
        with pytest.raises(ValueError):
            source.overlap_transform(target, threshold=0)

    def test_scanner_pair_shares_at_least_threshold(self, report_clouds):
        scanner_0, scanner_1 = report_clouds[0], report_clouds[1]

        found = scanner_1.overlap_transform(scanner_0, threshold=12)
        assert found is not None

        orientation, translation = found
        assert translation == Vector3d(68, -1246, -43)
        assert orientation.rows == ((-1, 0, 0), (0, 1, 0), (0, 0, -1))
        assert len(scanner_1.common_points(scanner_0, orientation, translation)) >= 12

    def test_common_points(self, report_clouds):
        scanner_0, scanner_1 = report_clouds[0], report_clouds[1]
        orientation, translation = scanner_1.overlap_transform(scanner_0)

        shared = scanner_1.common_points(scanner_0, orientation, translation)
        assert Vector3d(-618, -824, -621) in shared
        assert Vector3d(459, -707, 401) in shared
        assert shared <= scanner_0.point_set

    def test_unrelated_clouds_do_not_overlap(self, report_clouds):
        # Scanners 0 and 2 share only three beacons.
        assert report_clouds[2].overlap_transform(report_clouds[0], threshold=12) is None

    def test_duplicate_points_are_counted_once(self):
        source = cloud((0, 0, 0), (0, 0, 0), (1, 0, 0))
        target = cloud((5, 5, 5), (6, 5, 5))
        assert source.overlap_transform(target, threshold=3) is None
        assert source.overlap_transform(target, threshold=2) is not None
