"""Brute-force cell simulation on a dense boolean tensor.

DenseGrid keeps one ``torch.bool`` entry per cell of a bounding cube and
applies instructions by painting slices. It is exact but only practical for
small regions, which makes it the reference the disjoint-cuboid engine is
checked against.
"""

import logging
from typing import Iterable, Optional

import torch

from cuboid_reboot.cube import Cube
from cuboid_reboot.errors import ValidationError

# CONSTANTS
DEFAULT_DENSE_CELL_LIMIT = 2 ** 24

logger = logging.getLogger(__name__)


def _validate_cell_limit(bounds: Cube, cell_limit: Optional[int]) -> None:
    """Reject grids whose cell count exceeds ``cell_limit``."""
    if cell_limit is None:
        return
    if not isinstance(cell_limit, int) or cell_limit <= 0:
        raise ValidationError(f"cell_limit must be a positive integer or None, got {cell_limit}")
    cells = bounds.volume()
    if cells > cell_limit:
        raise ValidationError(f"Dense grid over {bounds} has {cells} cells, above the limit of {cell_limit}")


class DenseGrid:
    """A dense on/off grid over a fixed bounding cube.

    The tensor is indexed ``[x, y, z]`` relative to ``bounds``. Cells outside
    ``bounds`` are ignored when painting.
    """

    def __init__(self, bounds: Cube, cell_limit: Optional[int] = DEFAULT_DENSE_CELL_LIMIT):
        """Initialize an all-off grid.

        Args:
            bounds: Region covered by the grid
            cell_limit: Maximum number of cells to allocate. None disables the check.

        Raises:
            ValidationError: If ``bounds`` is not a Cube or the grid is too large
        """
        if not isinstance(bounds, Cube):
            raise ValidationError(f"bounds must be a Cube, got {type(bounds)}")
        _validate_cell_limit(bounds, cell_limit)
        self._bounds = bounds
        self._cells = torch.zeros(tuple(s.cells for s in bounds.segments), dtype=torch.bool)

    @classmethod
    def from_instructions(cls, instructions: Iterable, bounds: Optional[Cube] = None,
                          cell_limit: Optional[int] = DEFAULT_DENSE_CELL_LIMIT) -> "DenseGrid":
        """Build a grid and apply ``instructions`` to it in order.

        Args:
            instructions: Instruction values to apply
            bounds: Region to simulate. Defaults to the bounding box of all cubes.
            cell_limit: Forwarded to the constructor

        Raises:
            ValidationError: If ``instructions`` is empty and no bounds are given
        """
        instructions = list(instructions)
        if bounds is None:
            bounds = Cube.bounding(step.cube for step in instructions)
            if bounds is None:
                raise ValidationError("Cannot infer dense grid bounds from an empty instruction list")
        grid = cls(bounds, cell_limit=cell_limit)
        for step in instructions:
            grid.apply(step)
        return grid

    @property
    def bounds(self) -> Cube:
        return self._bounds

    @property
    def cells(self) -> torch.Tensor:
        """The underlying boolean tensor (not a copy)."""
        return self._cells

    def _local_slices(self, cube: Cube) -> Optional[tuple[slice, ...]]:
        """Translate the part of ``cube`` inside the bounds into tensor slices."""
        clipped = cube.overlapping(self._bounds)
        if clipped is None:
            return None
        return tuple(
            slice(seg.start - origin.start, seg.end - origin.start + 1)
            for seg, origin in zip(clipped.segments, self._bounds.segments)
        )

    def paint(self, cube: Cube, value: bool) -> None:
        """Set every cell of ``cube`` inside the bounds to ``value``."""
        local = self._local_slices(cube)
        if local is None:
            logger.debug(f"Cube {cube} lies outside dense bounds {self._bounds}, skipping")
            return
        self._cells[local] = value

    def apply(self, instruction) -> None:
        self.paint(instruction.cube, instruction.is_on)

    def count(self) -> int:
        """Number of cells currently on."""
        return int(self._cells.sum().item())

    def __repr__(self) -> str:
        return f"DenseGrid(bounds={self._bounds}, on={self.count()})"
