"""Axis-aligned boxes of cells built from three Segments."""

from dataclasses import dataclass
from typing import Iterable, Optional

from cuboid_reboot.errors import ValidationError
from cuboid_reboot.segment import Segment
from cuboid_reboot.utils import checked_product

AXES = ('x', 'y', 'z')


@dataclass(frozen=True)
class Cube:
    """The Cartesian product of three closed Segments.

    Cubes are immutable value types with no identity beyond their
    coordinates. Every method that produces geometry returns new cubes.
    """

    x: Segment
    y: Segment
    z: Segment

    def __post_init__(self):
        for axis in AXES:
            if not isinstance(getattr(self, axis), Segment):
                raise ValidationError(f"Cube.{axis} must be a Segment, got {type(getattr(self, axis)).__name__}")

    @classmethod
    def from_ends(cls, x0: int, x1: int, y0: int, y1: int, z0: int, z1: int) -> "Cube":
        """Build a cube from inclusive per-axis ends, e.g. ``Cube.from_ends(10, 12, 10, 12, 10, 12)``."""
        return cls(Segment.from_ends(x0, x1), Segment.from_ends(y0, y1), Segment.from_ends(z0, z1))

    @classmethod
    def from_slices(cls, slices: tuple[int | slice, ...]) -> "Cube":
        """Build a cube from three half-open slices (or single coordinates)."""
        if len(slices) != 3:
            raise ValidationError(f"Expected 3 slices, got {len(slices)}")
        return cls(*(Segment.from_slice(s) for s in slices))

    @classmethod
    def bounding(cls, cubes: Iterable["Cube"]) -> Optional["Cube"]:
        """Smallest cube containing every cube in ``cubes``, or None if there are none."""
        cubes = list(cubes)
        if not cubes:
            return None
        ends = []
        for axis in AXES:
            segments = [getattr(c, axis) for c in cubes]
            ends.append(min(s.start for s in segments))
            ends.append(max(s.end for s in segments))
        return cls.from_ends(*ends)

    @property
    def segments(self) -> tuple[Segment, Segment, Segment]:
        return (self.x, self.y, self.z)

    def volume(self) -> int:
        """Number of cells in the cube.

        Raises:
            VolumeOverflowError: If the count does not fit an unsigned 64-bit integer
        """
        return checked_product(s.cells for s in self.segments)

    def intersects(self, other: "Cube") -> bool:
        return self.x.intersects(other.x) and self.y.intersects(other.y) and self.z.intersects(other.z)

    def overlapping(self, other: "Cube") -> Optional["Cube"]:
        """Exact intersection with ``other``, or None if any axis is disjoint."""
        x = self.x.overlapping(other.x)
        if x is None:
            return None
        y = self.y.overlapping(other.y)
        if y is None:
            return None
        z = self.z.overlapping(other.z)
        if z is None:
            return None
        return Cube(x, y, z)

    def non_overlapping(self, other: "Cube") -> list["Cube"]:
        """Decompose ``self`` minus ``other`` into pairwise-disjoint cubes.

        Each axis is split into its overlap with ``other`` followed by the
        remainder pieces. The pieces are then walked with x taking priority
        over y, and y over z:

        - an x remainder keeps the full y and z extent of ``self``
        - inside the x overlap, a y remainder keeps the full z extent
        - inside the x and y overlap, each z remainder is emitted as is

        The piece that overlaps on all three axes is the intersection itself
        and is never emitted. If the cubes do not intersect the result is
        ``[self]``.

        Returns:
            list[Cube]: Disjoint cubes whose union is exactly ``self \\ other``
        """
        if not self.intersects(other):
            return [self]

        xs = self.x.parts(other.x)
        ys = self.y.parts(other.y)
        zs = self.z.parts(other.z)

        pieces = []
        for px in xs:
            if not px.is_overlapping:
                pieces.append(Cube(px.value, self.y, self.z))
                continue
            for py in ys:
                if not py.is_overlapping:
                    pieces.append(Cube(px.value, py.value, self.z))
                    continue
                for pz in zs:
                    if not pz.is_overlapping:
                        pieces.append(Cube(px.value, py.value, pz.value))
        return pieces

    def try_adding(self, other: "Cube") -> Optional["Cube"]:
        """Merge with ``other`` when both match on two axes and touch on the third.

        Axes are tried in x, y, z order. Returns None when no merge applies.
        """
        x = self.x.try_adding(other.x)
        if x is not None and self.y == other.y and self.z == other.z:
            return Cube(x, self.y, self.z)

        y = self.y.try_adding(other.y)
        if y is not None and self.x == other.x and self.z == other.z:
            return Cube(self.x, y, self.z)

        z = self.z.try_adding(other.z)
        if z is not None and self.x == other.x and self.y == other.y:
            return Cube(self.x, self.y, z)

        return None

    def to_slices(self) -> tuple[slice, slice, slice]:
        """Half-open slices covering the cube, in x, y, z order."""
        return tuple(s.to_slice() for s in self.segments)

    def to_ends(self) -> tuple[int, int, int, int, int, int]:
        """Inclusive ends ``(x0, x1, y0, y1, z0, z1)``."""
        return (self.x.start, self.x.end, self.y.start, self.y.end, self.z.start, self.z.end)

    # --- Serialization helpers ---
    def to_dict(self) -> dict:
        return {axis: getattr(self, axis).to_dict() for axis in AXES}

    @classmethod
    def from_dict(cls, data: dict) -> "Cube":
        return cls(*(Segment.from_dict(data[axis]) for axis in AXES))

    def __str__(self) -> str:
        return f"[x={self.x},y={self.y},z={self.z}]"
