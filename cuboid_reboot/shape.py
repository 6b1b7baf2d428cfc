"""A region of 3D space kept as a list of pairwise-disjoint cubes."""

import logging
from typing import Iterable, Iterator, Optional

import numpy as np

from cuboid_reboot.cube import Cube
from cuboid_reboot.errors import ValidationError
from cuboid_reboot.utils import checked_sum

# ARRAY LAYOUT
ARRAY_COLUMNS = ('x0', 'x1', 'y0', 'y1', 'z0', 'z1')

logger = logging.getLogger(__name__)


def _subtract_single(cubes: list[Cube], cube: Cube) -> None:
    """Remove ``cube`` from every member of ``cubes`` in place.

    Each intersecting member is decomposed from its original value. The first
    remainder piece takes the member's slot and any further pieces are
    appended once the walk is done, so members are never decomposed against
    an already shrunk version. A member fully covered by ``cube`` is dropped.
    """
    extra = []
    i = 0
    while i < len(cubes):
        current = cubes[i]
        if not current.intersects(cube):
            i += 1
            continue
        pieces = current.non_overlapping(cube)
        if pieces:
            cubes[i] = pieces[0]
            extra.extend(pieces[1:])
            i += 1
        else:
            del cubes[i]
    cubes.extend(extra)


class Shape:
    """An ordered collection of cubes, no two of which intersect.

    A Shape is the "on" region of a reboot. It supports two mutations:

    - ``add``: union in a cube, keeping only the parts not already covered
    - ``subtract``: carve a cube out, splitting the members it touches

    Because members are disjoint, the volume is the plain sum of member
    volumes and is valid after every mutation.
    """

    def __init__(self, cubes: Optional[Iterable[Cube]] = None):
        """Initialize a shape from ``cubes``, which must already be pairwise disjoint.

        Raises:
            ValidationError: If an item is not a Cube or two cubes intersect
        """
        self._cubes: list[Cube] = []
        for cube in cubes or ():
            if not isinstance(cube, Cube):
                raise ValidationError(f"Shape members must be Cube instances, got {type(cube)}")
            self._cubes.append(cube)
        if not self.is_disjoint():
            raise ValidationError("Shape members must be pairwise disjoint")

    @property
    def cubes(self) -> tuple[Cube, ...]:
        return tuple(self._cubes)

    def __len__(self) -> int:
        return len(self._cubes)

    def __iter__(self) -> Iterator[Cube]:
        return iter(tuple(self._cubes))

    def __bool__(self) -> bool:
        return bool(self._cubes)

    def copy(self) -> "Shape":
        shape = Shape()
        shape._cubes = list(self._cubes)
        return shape

    def add(self, cube: Cube) -> None:
        """Union ``cube`` into the shape.

        The parts of ``cube`` already covered by members are subtracted first,
        member by member, and the uncovered remainder is appended.
        """
        remainder = [cube]
        for member in self._cubes:
            if not remainder:
                break
            _subtract_single(remainder, member)
        logger.debug(f"Adding {cube} as {len(remainder)} new cube(s)")
        self._cubes.extend(remainder)

    def subtract(self, cube: Cube) -> None:
        """Carve ``cube`` out of the shape. A no-op on an empty shape."""
        before = len(self._cubes)
        _subtract_single(self._cubes, cube)
        logger.debug(f"Subtracted {cube}: {before} -> {len(self._cubes)} cube(s)")

    def volume(self) -> int:
        """Total number of cells covered.

        Raises:
            VolumeOverflowError: If the total does not fit an unsigned 64-bit integer
        """
        return checked_sum(cube.volume() for cube in self._cubes)

    def is_disjoint(self) -> bool:
        """Check that no two members intersect. Quadratic; meant for tests and validation."""
        cubes = self._cubes
        for i, a in enumerate(cubes):
            for b in cubes[i + 1:]:
                if a.intersects(b):
                    return False
        return True

    def compact(self) -> int:
        """Merge adjacent members that line up on two axes.

        Pairs are merged with ``Cube.try_adding`` until no pair merges. Volume
        and disjointness are unchanged; only the member count shrinks.

        Returns:
            int: Number of merges performed
        """
        merges = 0
        merged = True
        while merged:
            merged = False
            for i in range(len(self._cubes)):
                for j in range(i + 1, len(self._cubes)):
                    combined = self._cubes[i].try_adding(self._cubes[j])
                    if combined is None:
                        continue
                    self._cubes[i] = combined
                    del self._cubes[j]
                    merges += 1
                    merged = True
                    break
                if merged:
                    break
        if merges:
            logger.debug(f"Compacted shape with {merges} merge(s), {len(self._cubes)} cube(s) left")
        return merges

    def bounds(self) -> Optional[Cube]:
        """Bounding cube of all members, or None for an empty shape."""
        return Cube.bounding(self._cubes)

    def rasterize(self, bounds: Optional[Cube] = None, **kwargs):
        """Paint the shape into a dense boolean tensor.

        Args:
            bounds: Region to rasterize. Defaults to the shape's bounding cube.
            **kwargs: Forwarded to DenseGrid (e.g. ``cell_limit``)

        Returns:
            torch.Tensor: Boolean tensor indexed ``[x, y, z]`` relative to ``bounds``

        Raises:
            ValidationError: If the shape is empty and no bounds are given
        """
        # Local import keeps torch off the core import path
        from cuboid_reboot.dense import DenseGrid

        if bounds is None:
            bounds = self.bounds()
            if bounds is None:
                raise ValidationError("Cannot rasterize an empty shape without bounds")
        grid = DenseGrid(bounds, **kwargs)
        for cube in self._cubes:
            grid.paint(cube, True)
        return grid.cells

    # --- Serialization helpers ---
    def to_array(self) -> np.ndarray:
        """Members as an ``int64`` array of shape ``(n, 6)`` with columns ``x0, x1, y0, y1, z0, z1``."""
        if not self._cubes:
            return np.empty((0, len(ARRAY_COLUMNS)), dtype=np.int64)
        return np.array([cube.to_ends() for cube in self._cubes], dtype=np.int64)

    @classmethod
    def from_array(cls, array, validate: bool = True) -> "Shape":
        """Inverse of ``to_array``.

        Args:
            array: Integer array of shape ``(n, 6)``
            validate: Check that the cubes are pairwise disjoint. Pass False
                      only for arrays written by ``to_array``.

        Raises:
            ValidationError: If the array is not ``(n, 6)`` or, with ``validate``,
                             its cubes intersect
        """
        array = np.asarray(array)
        if array.ndim != 2 or array.shape[1] != len(ARRAY_COLUMNS):
            raise ValidationError(f"Expected an array of shape (n, {len(ARRAY_COLUMNS)}), got {array.shape}")
        cubes = [Cube.from_ends(*(int(v) for v in row)) for row in array]
        if validate:
            return cls(cubes)
        shape = cls()
        shape._cubes = cubes
        return shape

    def to_json(self) -> dict:
        return {'cubes': [cube.to_dict() for cube in self._cubes]}

    @classmethod
    def from_json(cls, data: dict) -> "Shape":
        return cls(Cube.from_dict(c) for c in data['cubes'])

    def __repr__(self) -> str:
        return f"Shape(cubes={len(self._cubes)})"
