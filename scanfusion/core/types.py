"""
Core data types for the ScanFusion alignment platform.

This module defines the integer geometric primitives used throughout the
platform: the immutable 3-vector and the catalog of 24 axis-aligned
rotation matrices that relate a scanner's local frame to the global frame.
"""

from __future__ import annotations
from typing import Iterator, List, Tuple
from dataclasses import dataclass
import itertools
import re

import numpy as np


Matrix3 = Tuple[Tuple[int, int, int], Tuple[int, int, int], Tuple[int, int, int]]

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Vector3d:
    """Immutable integer 3D vector."""
    x: int = 0
    y: int = 0
    z: int = 0

    @classmethod
    def parse(cls, text: str) -> Vector3d:
        """
        Parse a vector from an ``x,y,z`` coordinate string.

        Args:
            text: Three signed decimal integers separated by commas

        Returns:
            Parsed vector

        Raises:
            ValueError: If the text does not hold exactly three integers
        """
        components = text.split(",")
        if len(components) != 3:
            raise ValueError(f"Expected 3 comma-separated components, got {len(components)}: {text!r}")

        for component in components:
            if not _INTEGER.fullmatch(component):
                raise ValueError(f"Invalid integer component {component!r} in {text!r}")

        x, y, z = (int(component) for component in components)
        return cls(x, y, z)

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3d:
        return Vector3d(-self.x, -self.y, -self.z)

    def add(self, other: Vector3d) -> Vector3d:
        """Component-wise sum."""
        return self + other

    def sub(self, other: Vector3d) -> Vector3d:
        """Component-wise difference."""
        return self - other

    def negate(self) -> Vector3d:
        return -self

    def rotate(self, rotation: RotationMatrix) -> Vector3d:
        """Rotate the vector through an integer rotation matrix."""
        return rotation.apply(self)

    def manhattan_distance(self, other: Vector3d) -> int:
        """Sum of absolute component differences."""
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


def _sin(quarter_turns: int) -> int:
    return (0, 1, 0, -1)[quarter_turns % 4]


def _cos(quarter_turns: int) -> int:
    return (1, 0, -1, 0)[quarter_turns % 4]


@dataclass(frozen=True)
class RotationMatrix:
    """
    3x3 integer rotation matrix restricted to signed axis permutations.

    Every entry is -1, 0 or 1, so applying the matrix to an integer vector
    is exact.
    """
    rows: Matrix3

    @classmethod
    def from_quarter_turns(cls, x: int, y: int, z: int) -> RotationMatrix:
        """
        Build the rotation for quarter turns about X, then Y, then Z.

        Args:
            x: Quarter turns about the X axis
            y: Quarter turns about the Y axis
            z: Quarter turns about the Z axis

        Returns:
            Rotation matrix equal to Rz @ Ry @ Rx
        """
        sx, cx = _sin(x), _cos(x)
        sy, cy = _sin(y), _cos(y)
        sz, cz = _sin(z), _cos(z)

        return cls((
            (cz * cy, cz * sy * sx - sz * cx, cz * sy * cx + sz * sx),
            (sz * cy, sz * sy * sx + cz * cx, sz * sy * cx - cz * sx),
            (-sy, cy * sx, cy * cx),
        ))

    def apply(self, vector: Vector3d) -> Vector3d:
        """Integer matrix-vector product."""
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        x, y, z = vector.x, vector.y, vector.z
        return Vector3d(
            a * x + b * y + c * z,
            d * x + e * y + f * z,
            g * x + h * y + i * z,
        )

    def compose(self, other: RotationMatrix) -> RotationMatrix:
        """Return ``self @ other`` (apply ``other`` first)."""
        return RotationMatrix(tuple(
            tuple(
                sum(self.rows[r][k] * other.rows[k][c] for k in range(3))
                for c in range(3)
            )
            for r in range(3)
        ))

    def transpose(self) -> RotationMatrix:
        return RotationMatrix(tuple(zip(*self.rows)))

    def inverse(self) -> RotationMatrix:
        """Inverse rotation; for an orthogonal matrix this is the transpose."""
        return self.transpose()

    def determinant(self) -> int:
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    def is_signed_permutation(self) -> bool:
        """Check for exactly one +/-1 entry per row and per column."""
        array = self.as_array()
        if not np.isin(array, (-1, 0, 1)).all():
            return False
        nonzero = array != 0
        return bool((nonzero.sum(axis=0) == 1).all() and (nonzero.sum(axis=1) == 1).all())

    def as_array(self) -> np.ndarray:
        """Get the matrix as a 3x3 numpy integer array."""
        return np.array(self.rows, dtype=np.int64)

    def __str__(self) -> str:
        return "[" + "; ".join(" ".join(f"{v:2d}" for v in row) for row in self.rows) + "]"


def generate_orientations() -> Tuple[RotationMatrix, ...]:
    """
    Generate the 24 proper rotations of the cube.

    Z turns are combined with Y turns to point the original X axis at each
    of the four horizontal directions, then with X turns of 1 and 3 quarter
    turns to point it straight up or down. The identity comes first.

    Raises:
        AssertionError: If the generated catalog is not the full rotation group
    """
    triples: List[Tuple[int, int, int]] = [(0, y, z) for y in range(4) for z in range(4)]
    triples += [(1, 0, z) for z in range(4)]
    triples += [(3, 0, z) for z in range(4)]

    orientations = tuple(RotationMatrix.from_quarter_turns(*t) for t in triples)
    _validate_orientations(orientations)
    return orientations


def _validate_orientations(orientations: Tuple[RotationMatrix, ...]) -> None:
    distinct = set(orientations)
    if len(distinct) != 24 or len(orientations) != 24:
        raise AssertionError(f"expected 24 distinct orientations, got {len(distinct)}")

    for orientation in orientations:
        if not orientation.is_signed_permutation():
            raise AssertionError(f"orientation {orientation} is not a signed permutation")
        if round(np.linalg.det(orientation.as_array())) != 1:
            raise AssertionError(f"orientation {orientation} is not a proper rotation")

    for a, b in itertools.product(orientations, repeat=2):
        if a.compose(b) not in distinct:
            raise AssertionError("orientation catalog is not closed under composition")


ORIENTATIONS: Tuple[RotationMatrix, ...] = generate_orientations()
IDENTITY: RotationMatrix = ORIENTATIONS[0]
ZERO: Vector3d = Vector3d(0, 0, 0)
